import threading

import pytest

from personal_color.analysis.exceptions import AnalysisRejectedError
from personal_color.worker.executor import BoundedAnalysisExecutor
from personal_color.worker.handle import AnalysisHandle, SubmissionStatus


class TestBoundedAnalysisExecutor:
    def test_runs_submitted_task(self) -> None:
        with BoundedAnalysisExecutor(max_workers=2, queue_capacity=2) as executor:
            future = executor.submit(lambda a, b: a + b, 2, 3)

            assert future.result(timeout=5) == 5

    def test_capacity_is_workers_plus_queue(self) -> None:
        with BoundedAnalysisExecutor(max_workers=10, queue_capacity=100) as executor:
            assert executor.capacity == 110

    def test_rejects_when_saturated(self) -> None:
        release = threading.Event()
        with BoundedAnalysisExecutor(max_workers=1, queue_capacity=1) as executor:
            running = executor.submit(release.wait, 5)
            queued = executor.submit(release.wait, 5)

            with pytest.raises(AnalysisRejectedError, match="full"):
                executor.submit(release.wait, 5)

            release.set()
            assert running.result(timeout=5) is True
            assert queued.result(timeout=5) is True

    def test_accepts_again_after_tasks_finish(self) -> None:
        with BoundedAnalysisExecutor(max_workers=1, queue_capacity=0) as executor:
            executor.submit(lambda: None).result(timeout=5)

            assert executor.submit(lambda: "again").result(timeout=5) == "again"

    def test_failed_task_releases_its_slot(self) -> None:
        def boom() -> None:
            raise RuntimeError("boom")

        with BoundedAnalysisExecutor(max_workers=1, queue_capacity=0) as executor:
            with pytest.raises(RuntimeError):
                executor.submit(boom).result(timeout=5)

            assert executor.submit(lambda: 1).result(timeout=5) == 1

    def test_rejects_after_shutdown(self) -> None:
        executor = BoundedAnalysisExecutor(max_workers=1, queue_capacity=0)
        executor.shutdown()

        with pytest.raises(AnalysisRejectedError, match="not accepting work"):
            executor.submit(lambda: 1)

    @pytest.mark.parametrize(("workers", "queue"), [(0, 1), (1, -1)])
    def test_rejects_invalid_sizes(self, workers: int, queue: int) -> None:
        with pytest.raises(ValueError):
            BoundedAnalysisExecutor(max_workers=workers, queue_capacity=queue)


class TestAnalysisHandle:
    def test_status_progression(self) -> None:
        started = threading.Event()
        release = threading.Event()
        handle = AnalysisHandle("stored.png")

        def task() -> str:
            handle.mark_running()
            started.set()
            release.wait(5)
            return "record"

        assert handle.status == SubmissionStatus.SUBMITTED
        with BoundedAnalysisExecutor(max_workers=1, queue_capacity=0) as executor:
            handle.attach(executor.submit(task))  # type: ignore[arg-type]
            started.wait(5)
            assert handle.status == SubmissionStatus.RUNNING
            assert not handle.done()

            release.set()
            assert handle.result(timeout=5) == "record"

        assert handle.status == SubmissionStatus.COMPLETED
        assert handle.exception(timeout=1) is None

    def test_failed_status(self) -> None:
        handle = AnalysisHandle("stored.png")

        def task() -> None:
            handle.mark_running()
            raise ValueError("bad")

        with BoundedAnalysisExecutor(max_workers=1, queue_capacity=0) as executor:
            handle.attach(executor.submit(task))  # type: ignore[arg-type]
            with pytest.raises(ValueError, match="bad"):
                handle.result(timeout=5)

        assert handle.status == SubmissionStatus.FAILED
        assert isinstance(handle.exception(timeout=1), ValueError)

    def test_result_times_out_when_never_attached(self) -> None:
        with pytest.raises(TimeoutError):
            AnalysisHandle("stored.png").result(timeout=0.01)
