"""Per-thread bookkeeping: state and time of last activity."""

from __future__ import annotations

import threading
import time
from datetime import timedelta
from enum import Enum
from typing import Optional, Union

from .logger import LogLevel, get_logger
from .thread import WorkerThread

__all__ = ["ThreadState", "ThreadMeta"]


class ThreadState(Enum):
    """Life-cycle state of a worker thread."""

    IDLE = "Idle"
    RUNNING = "Running"
    TERMINATING = "Terminating"
    TERMINATED = "Terminated"

    def __str__(self) -> str:
        return self.value


class ThreadMeta:
    """Tracks the state of one worker and when it last finished work."""

    def __init__(self, thread_id: int, thread: Optional[WorkerThread] = None) -> None:
        self.id = thread_id
        self.thread = thread
        self._lock = threading.Lock()
        self._state = ThreadState.IDLE
        self._last_active = time.monotonic()
        if thread is None:
            message = f"[ThreadMeta] Created with ID = {thread_id}"
        else:
            message = "[ThreadMeta] Initialized with thread. State = Idle"
        get_logger().log(message, LogLevel.INFO, thread_id)

    @property
    def state(self) -> ThreadState:
        with self._lock:
            return self._state

    @property
    def last_active(self) -> float:
        """Monotonic time at which the thread last became idle."""
        with self._lock:
            return self._last_active

    def _set(self, state: ThreadState, label: str) -> None:
        with self._lock:
            self._state = state
            if state is ThreadState.IDLE:
                self._last_active = time.monotonic()
        get_logger().log(f"[ThreadMeta] Marked {label}", LogLevel.INFO, self.id)

    def mark_idle(self) -> None:
        self._set(ThreadState.IDLE, "Idle")

    def is_idle(self) -> bool:
        with self._lock:
            return self._state is ThreadState.IDLE

    def mark_running(self) -> None:
        self._set(ThreadState.RUNNING, "Running")

    def should_recycle(self, timeout: Union[float, timedelta]) -> bool:
        """True if idle for longer than ``timeout`` seconds."""
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        with self._lock:
            return (
                self._state is ThreadState.IDLE
                and time.monotonic() - self._last_active > timeout
            )

    def mark_terminating(self) -> None:
        self._set(ThreadState.TERMINATING, "Terminating")

    def mark_terminated(self) -> None:
        self._set(ThreadState.TERMINATED, "Terminated")

    def join(self) -> None:
        """Wait for the attached thread, if any, to finish."""
        if self.thread is not None and self.thread.joinable():
            get_logger().log("[ThreadMeta] Joining thread", LogLevel.INFO, self.id)
            self.thread.join()