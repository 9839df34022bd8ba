import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeVar

from personal_color.analysis.exceptions import AnalysisRejectedError
from personal_color.logging.logger import Log

T = TypeVar("T")


class BoundedAnalysisExecutor:
    """Thread pool with a hard cap on running plus queued tasks.

    Up to max_workers tasks run at once and up to queue_capacity more wait.
    Anything beyond that is rejected immediately instead of queueing forever.
    """

    def __init__(
        self,
        max_workers: int,
        queue_capacity: int,
        thread_name_prefix: str = "PersonalColor-",
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        if queue_capacity < 0:
            raise ValueError("queue_capacity must be >= 0")
        self._capacity = max_workers + queue_capacity
        self._slots = threading.BoundedSemaphore(self._capacity)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=thread_name_prefix,
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Future[T]":
        """Schedule fn on a worker thread.

        Raises:
            AnalysisRejectedError: if running and queued tasks are at capacity,
                or the executor has been shut down.
        """
        if not self._slots.acquire(blocking=False):
            Log.warning(f"Analysis executor saturated ({self._capacity} tasks), rejecting")
            raise AnalysisRejectedError(
                f"Analysis queue is full ({self._capacity} tasks in flight)"
            )
        try:
            return self._executor.submit(self._run_and_release, fn, *args, **kwargs)
        except RuntimeError as exc:
            self._slots.release()
            raise AnalysisRejectedError(f"Analysis executor is not accepting work: {exc}") from exc
        except BaseException:
            self._slots.release()
            raise

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work. With wait=True, queued tasks still run to completion."""
        self._executor.shutdown(wait=wait)
        Log.info("Analysis executor shut down")

    def __enter__(self) -> "BoundedAnalysisExecutor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)

    def _run_and_release(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return fn(*args, **kwargs)
        finally:
            self._slots.release()
