import threading
from concurrent.futures import Future
from enum import Enum

from personal_color.analysis.models import AnalysisRecord


class SubmissionStatus(str, Enum):
    SUBMITTED = "SUBMITTED"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class AnalysisHandle:
    """Caller-side view of one asynchronous submission.

    Cancellation is not supported: a caller may stop waiting on result(),
    but the worker runs the classification to completion regardless.
    """

    def __init__(self, stored_name: str) -> None:
        self.stored_name = stored_name
        self._future: Future[AnalysisRecord] | None = None
        self._started = threading.Event()
        self._attached = threading.Event()

    def attach(self, future: "Future[AnalysisRecord]") -> None:
        self._future = future
        self._attached.set()

    def mark_running(self) -> None:
        self._started.set()

    @property
    def status(self) -> SubmissionStatus:
        future = self._future
        if future is not None and future.done():
            if future.exception() is not None:
                return SubmissionStatus.FAILED
            return SubmissionStatus.COMPLETED
        if self._started.is_set():
            return SubmissionStatus.RUNNING
        return SubmissionStatus.SUBMITTED

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def result(self, timeout: float | None = None) -> AnalysisRecord:
        """Wait for the persisted record.

        Raises:
            TimeoutError: if the record is not ready within timeout seconds.
            ClassificationError | InternalAnalysisError: if the run failed.
        """
        return self._wait(timeout).result(timeout=timeout)

    def exception(self, timeout: float | None = None) -> BaseException | None:
        return self._wait(timeout).exception(timeout=timeout)

    def _wait(self, timeout: float | None) -> "Future[AnalysisRecord]":
        if not self._attached.wait(timeout):
            raise TimeoutError(f"Submission {self.stored_name} was not scheduled in time")
        if self._future is None:
            raise RuntimeError(f"Submission {self.stored_name} has no future attached")
        return self._future
