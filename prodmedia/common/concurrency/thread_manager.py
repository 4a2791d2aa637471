from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")

log = logging.getLogger(__name__)


@dataclass
class ThreadStats:
    start_ts: float
    tasks_submitted: int = 0
    tasks_completed: int = 0
    tasks_failed: int = 0

    @property
    def uptime_sec(self) -> float:
        return time.time() - self.start_ts

    @property
    def in_flight(self) -> int:
        return max(0, self.tasks_submitted - (self.tasks_completed + self.tasks_failed))


@dataclass(frozen=True)
class Settled(Generic[R]):
    """Outcome of one task in a settle-all join: exactly one of value/error is meaningful."""
    value: Optional[R] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ThreadManager(Generic[T, R]):
    """
    A bounded thread-pool manager for I/O-bound fan-out (downloads, uploads).

    Features
    --------
    - submit(fn, *args, **kwargs) -> Future
    - map_settled(fn, items) -> List[Settled[R]]  (wait for all, never abort on first error)
    - Stats snapshot
    - Clean shutdown, context manager support
    """

    def __init__(
        self,
        name: str = "worker",
        max_workers: Optional[int] = None,
        thread_name_prefix: Optional[str] = None,
        log_exceptions: bool = True,
    ) -> None:
        if max_workers is None:
            n = os.cpu_count() or 4
            max_workers = max(4, min(8, n * 2))  # I/O-friendly default

        self._name = name
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=thread_name_prefix or f"{name}",
        )
        self._stats = ThreadStats(start_ts=time.time())
        self._log_exceptions = log_exceptions
        self._closed = False
        self._lock = threading.Lock()

    # -------------------------
    # Lifecycle
    # -------------------------
    def shutdown(self, wait: bool = True) -> None:
        """Shut down the executor. Safe to call multiple times."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ThreadManager[T, R]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # No cancellation: in-flight fetches/uploads run to completion or their own timeout
        self.shutdown(wait=True)

    def stats(self) -> ThreadStats:
        """Return a *snapshot* of current stats."""
        with self._lock:
            return ThreadStats(
                start_ts=self._stats.start_ts,
                tasks_submitted=self._stats.tasks_submitted,
                tasks_completed=self._stats.tasks_completed,
                tasks_failed=self._stats.tasks_failed,
            )

    # -------------------------
    # Submission
    # -------------------------
    def submit(self, fn: Callable[..., R], /, *args, **kwargs) -> Future[R]:
        """
        Submit a single callable. Returns a Future that will hold the result or exception.
        """
        if self._closed:
            raise RuntimeError(f"{self._name}: submit() after shutdown")

        with self._lock:
            self._stats.tasks_submitted += 1

        fut: Future[R] = self._executor.submit(fn, *args, **kwargs)

        def _cb(f: Future[R]) -> None:
            exc = f.exception()
            with self._lock:
                if exc is None:
                    self._stats.tasks_completed += 1
                else:
                    self._stats.tasks_failed += 1
            if exc is not None and self._log_exceptions:
                log.error("%s task failed: %s", self._name, exc, exc_info=exc)

        fut.add_done_callback(_cb)
        return fut

    # -------------------------
    # Bulk helpers
    # -------------------------
    def map_settled(self, fn: Callable[[T], R], items: Iterable[T]) -> List[Settled[R]]:
        """
        Run fn over every item concurrently and block until *all* have settled.
        Results come back in input order; a failing item never stops its siblings.
        """
        futures_list = [self.submit(fn, item) for item in items]
        out: List[Settled[R]] = []
        for f in futures_list:
            exc = f.exception()
            if exc is None:
                out.append(Settled(value=f.result()))
            else:
                out.append(Settled(error=exc))
        return out
