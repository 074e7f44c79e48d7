"""First-in first-out scheduler with a bounded queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Optional

from .base import RejectPolicy, Scheduler, Task, TaskRejectedError

__all__ = ["FIFOScheduler"]


class FIFOScheduler(Scheduler):
    """Hands tasks out in the order they were added."""

    def __init__(
        self, max_queue_size: int = 0, reject_policy: RejectPolicy = RejectPolicy.BLOCK
    ) -> None:
        self._queue: Deque[Task] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)
        self._running = True
        self._reject_policy = reject_policy
        self._max_queue_size = max_queue_size

    @property
    def reject_policy(self) -> RejectPolicy:
        return self._reject_policy

    @property
    def max_queue_size(self) -> int:
        return self._max_queue_size

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def set_reject_policy(self, policy: RejectPolicy) -> None:
        self._reject_policy = policy
        print(f"[FIFOScheduler] RejectPolicy {policy.value}")

    def set_max_queue_size(self, max_size: int) -> None:
        self._max_queue_size = max_size

    def add_task(self, task: Task) -> bool:
        """Queue ``task``; return False if it was discarded because the queue is full."""
        with self._lock:
            if self._max_queue_size > 0 and len(self._queue) >= self._max_queue_size:
                if self._reject_policy is RejectPolicy.BLOCK:
                    self._not_full.wait_for(
                        lambda: len(self._queue) < self._max_queue_size
                    )
                elif self._reject_policy is RejectPolicy.DISCARD:
                    print("[FIFOScheduler] Task discarded (queue full)")
                    return False
                else:
                    raise TaskRejectedError("[FIFOScheduler] Task rejected (queue full)")
            self._queue.append(task)
            print("[FIFOScheduler] Task pushed")
            self._not_empty.notify()
        return True

    def get_task(self) -> Optional[Task]:
        with self._lock:
            self._not_empty.wait_for(lambda: bool(self._queue) or not self._running)
            if not self._queue:
                return None
            task = self._queue.popleft()
            self._not_full.notify()
            return task

    def report_status(self) -> None:
        with self._lock:
            print(f"[FIFOScheduler] Tasks in queue: {len(self._queue)}")

    def shutdown(self) -> None:
        with self._lock:
            self._running = False
            self._not_empty.notify_all()