"""Scheduler that releases tasks once all their dependencies have finished."""

from __future__ import annotations

import threading
import weakref
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, Optional

from .base import RejectPolicy, Scheduler, Task
from .logger import log_error

__all__ = ["TaskNode", "DAGScheduler"]


@dataclass(eq=False)
class TaskNode:
    """A task with a count of unfinished dependencies and weak links to its dependents."""

    task: Optional[Task] = None
    dependency_count: int = 0
    dependents: List["weakref.ReferenceType[TaskNode]"] = field(default_factory=list)


class DAGScheduler(Scheduler):
    """Runs nodes of a dependency graph as their dependencies complete."""

    def __init__(self) -> None:
        self._ready: Deque[Optional[TaskNode]] = deque()
        self._lock = threading.Lock()
        self._ready_cv = threading.Condition(self._lock)
        self._running = True

    def add_task(self, task: Task) -> None:
        """Plain tasks are not accepted; use :meth:`add_node`."""
        print("[DAGScheduler] addTask(Task) not supported.")

    def add_node(self, node: TaskNode, dependencies: Iterable[Optional[TaskNode]] = ()) -> None:
        """Register ``node``; it becomes ready once every dependency has completed."""
        deps = list(dependencies)
        with self._lock:
            node.dependency_count = len(deps)
            for dep in deps:
                if dep is not None:
                    dep.dependents.append(weakref.ref(node))
            if node.dependency_count == 0:
                self._ready.append(node)
                self._ready_cv.notify()

    def get_task(self) -> Optional[Task]:
        with self._lock:
            self._ready_cv.wait_for(lambda: bool(self._ready) or not self._running)
            if not self._ready:
                return None
            node = self._ready.popleft()

        if node is None or node.task is None:
            log_error("[DAGScheduler] ERROR: null or empty task node in getTask()")
            return None

        def run() -> None:
            try:
                node.task()
            except Exception as exc:
                log_error(f"[DAGScheduler] Exception in task: {exc}")
            self._task_completed(node)

        return run

    def _task_completed(self, node: TaskNode) -> None:
        with self._lock:
            for ref in node.dependents:
                dependent = ref()
                if dependent is None:
                    continue
                if dependent.dependency_count > 0:
                    dependent.dependency_count -= 1
                if dependent.dependency_count == 0:
                    self._ready.append(dependent)
                    self._ready_cv.notify()

    def report_status(self) -> None:
        with self._lock:
            print(f"[DAGScheduler] Ready queue size: {len(self._ready)}")

    def shutdown(self) -> None:
        with self._lock:
            self._running = False
            self._ready_cv.notify_all()

    def set_reject_policy(self, policy: RejectPolicy) -> None:
        print("[DAGScheduler] RejectPolicy not applicable.")

    def set_max_queue_size(self, max_size: int) -> None:
        print("[DAGScheduler] MaxQueueSize not used.")

    def __len__(self) -> int:
        with self._lock:
            return len(self._ready)