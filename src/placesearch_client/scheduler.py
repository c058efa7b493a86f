from __future__ import annotations
import heapq
import itertools
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional, Protocol, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")
Done = Callable[[Optional[Any], Optional[BaseException]], None]


class Scheduler(Protocol):
    """
    Single logical timeline, modeled on tkinter's after()/after_cancel().
    Callbacks registered with after() run one at a time, never re-entrantly.
    submit() runs blocking work elsewhere and reports back on the timeline.
    """
    def after(self, delay_ms: int, callback: Callable[[], None]) -> Any: ...
    def after_cancel(self, handle: Any) -> None: ...
    def submit(self, work: Callable[[], T], done: Done) -> None: ...


class ThreadScheduler:
    """
    Dispatcher thread draining a timer heap, plus a small worker pool for
    blocking lookups. Results of submit() are posted back with after(0, ...).
    """

    def __init__(self, workers: int = 4) -> None:
        self._heap: list[tuple[float, int, Callable[[], None]]] = []
        self._live: set[int] = set()          # handles still waiting in the heap
        self._ids = itertools.count()
        self._cv = threading.Condition()
        self._closed = False
        self._pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lookup")
        self._thread = threading.Thread(target=self._run, name="scheduler", daemon=True)
        self._thread.start()

    def after(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        due = time.monotonic() + max(0, delay_ms) / 1000.0
        with self._cv:
            heapq.heappush(self._heap, (due, handle, callback))
            self._live.add(handle)
            self._cv.notify()
        return handle

    def after_cancel(self, handle: int) -> None:
        with self._cv:
            self._live.discard(handle)

    def submit(self, work: Callable[[], T], done: Done) -> None:
        def _job() -> None:
            try:
                result = work()
            except Exception as exc:
                self.after(0, lambda err=exc: done(None, err))
                return
            self.after(0, lambda: done(result, None))
        self._pool.submit(_job)

    def close(self) -> None:
        with self._cv:
            self._closed = True
            self._cv.notify()
        self._pool.shutdown(wait=False, cancel_futures=True)
        self._thread.join(timeout=1.0)

    def _run(self) -> None:
        while True:
            with self._cv:
                while not self._closed:
                    if self._heap:
                        wait = self._heap[0][0] - time.monotonic()
                        if wait <= 0:
                            break
                        self._cv.wait(wait)
                    else:
                        self._cv.wait()
                if self._closed:
                    return
                _, handle, callback = heapq.heappop(self._heap)
                if handle not in self._live:
                    continue
                self._live.discard(handle)
            try:
                callback()
            except Exception:
                log.exception("scheduled callback failed")
