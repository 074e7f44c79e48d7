"""A worker thread that runs one function or serves assigned tasks."""

from __future__ import annotations

import itertools
import threading
from typing import Callable, Optional

from .logger import LogLevel, get_logger

__all__ = ["WorkerThread", "ThreadFunc"]

ThreadFunc = Callable[[int], object]

_id_source = itertools.count()


class WorkerThread:
    """An OS thread with an id.

    Given a function, :meth:`start` runs it once with the thread's id.
    Without one, the thread serves tasks handed over with :meth:`assign`
    until :meth:`stop` is called.
    """

    def __init__(
        self, func: Optional[ThreadFunc] = None, thread_id: Optional[int] = None
    ) -> None:
        self._func = func
        self._thread_id = next(_id_source) if thread_id is None else thread_id
        self._thread: Optional[threading.Thread] = None
        self._cond = threading.Condition()
        self._pending: Optional[ThreadFunc] = None
        self._has_task = False
        self._stop_requested = False

    @property
    def thread_id(self) -> int:
        """The id handed to every function this thread runs."""
        return self._thread_id

    def start(self) -> None:
        """Launch the thread; does nothing if it is already running."""
        logger = get_logger()
        logger.log("[Thread] thread start()", LogLevel.INFO, self._thread_id)
        if self._thread is not None:
            logger.log("[Thread] Thread already running", LogLevel.WARN, self._thread_id)
            return
        if self._func is not None:
            target, args = self._func, (self._thread_id,)
        else:
            target, args = self._run, ()
        self._thread = threading.Thread(
            target=target, args=args, name=f"worker-{self._thread_id}", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        logger = get_logger()
        logger.log("RUN", LogLevel.INFO, self._thread_id)
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._has_task or self._stop_requested)
                if self._stop_requested and not self._has_task:
                    break
                task, self._pending = self._pending, None
                self._has_task = False
                logger.log("Executing task", LogLevel.INFO, self._thread_id)
            if task is not None:
                task(self._thread_id)
        logger.log("Stopping thread", LogLevel.INFO, self._thread_id)

    def assign(self, task: ThreadFunc) -> None:
        """Hand ``task`` to the serving loop, replacing one not yet picked up."""
        with self._cond:
            self._pending = task
            self._has_task = True
            self._cond.notify()

    def stop(self) -> None:
        """Ask the serving loop to finish once no task is pending."""
        with self._cond:
            self._stop_requested = True
            self._cond.notify()

    def join(self) -> None:
        """Wait for the thread to finish."""
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def joinable(self) -> bool:
        """Whether the thread was started and not yet joined."""
        return self._thread is not None