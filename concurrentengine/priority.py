"""Scheduler that serves high-priority tasks before lower ones."""

from __future__ import annotations

import threading
from collections import deque
from enum import Enum
from typing import Deque, Dict, Optional

from .base import RejectPolicy, Scheduler, Task, TaskRejectedError

__all__ = ["TaskPriority", "PriorityScheduler"]


class TaskPriority(Enum):
    """Task priority; lower values are served first."""

    HIGH = 0
    MEDIUM = 1
    LOW = 2


class PriorityScheduler(Scheduler):
    """One FIFO queue per priority, drained from HIGH to LOW."""

    def __init__(
        self, max_queue_size: int = 0, reject_policy: RejectPolicy = RejectPolicy.BLOCK
    ) -> None:
        self._queues: Dict[TaskPriority, Deque[Task]] = {p: deque() for p in TaskPriority}
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

    def _total(self) -> int:
        return sum(len(q) for q in self._queues.values())

    def __len__(self) -> int:
        with self._lock:
            return self._total()

    def queue_sizes(self) -> Dict[TaskPriority, int]:
        """Number of queued tasks at each priority."""
        with self._lock:
            return {p: len(q) for p, q in self._queues.items()}

    def set_reject_policy(self, policy: RejectPolicy) -> None:
        self._reject_policy = policy
        print(f"[PriorityScheduler] RejectPolicy {policy.value}")

    def set_max_queue_size(self, max_size: int) -> None:
        self._max_queue_size = max_size

    def add_task(self, task: Task, priority: TaskPriority = TaskPriority.MEDIUM) -> bool:
        """Queue ``task``; return False if it was discarded because the queue is full."""
        with self._lock:
            if self._max_queue_size > 0 and self._total() >= self._max_queue_size:
                if self._reject_policy is RejectPolicy.BLOCK:
                    self._not_full.wait_for(lambda: self._total() < self._max_queue_size)
                elif self._reject_policy is RejectPolicy.DISCARD:
                    print("[PriorityScheduler] Task discarded (queue full)")
                    return False
                else:
                    raise TaskRejectedError(
                        "[PriorityScheduler] Task rejected (queue full)"
                    )
            self._queues[priority].append(task)
            print(f"[PriorityScheduler] Task pushed to priority {priority.value}")
            self._not_empty.notify()
        return True

    def get_task(self) -> Optional[Task]:
        with self._lock:
            self._not_empty.wait_for(lambda: self._total() > 0 or not self._running)
            for priority in TaskPriority:
                queue = self._queues[priority]
                if queue:
                    task = queue.popleft()
                    self._not_full.notify()
                    return task
            return None

    def report_status(self) -> None:
        with self._lock:
            print(
                "[PriorityScheduler] Queue Status:\n"
                f"  - HIGH   : {len(self._queues[TaskPriority.HIGH])}\n"
                f"  - MEDIUM : {len(self._queues[TaskPriority.MEDIUM])}\n"
                f"  - LOW    : {len(self._queues[TaskPriority.LOW])}\n"
                f"  - TOTAL  : {self._total()}"
            )

    def shutdown(self) -> None:
        with self._lock:
            self._running = False
            self._not_empty.notify_all()