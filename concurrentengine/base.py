"""Common scheduler interface and reject policies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional

__all__ = ["Task", "RejectPolicy", "TaskRejectedError", "Scheduler"]

Task = Callable[[], object]


class RejectPolicy(Enum):
    """What a bounded scheduler does when its queue is full."""

    BLOCK = "BLOCK"
    DISCARD = "DISCARD"
    THROW = "THROW"


class TaskRejectedError(RuntimeError):
    """Raised when a full queue rejects a task under the THROW policy."""


class Scheduler(ABC):
    """Queue of tasks shared between producers and worker threads."""

    @abstractmethod
    def add_task(self, task: Task):
        """Queue a task."""

    @abstractmethod
    def get_task(self) -> Optional[Task]:
        """Block until a task is ready; return ``None`` once shut down and drained."""

    @abstractmethod
    def report_status(self) -> None:
        """Print the current queue state."""

    @abstractmethod
    def shutdown(self) -> None:
        """Stop accepting waits and wake every blocked consumer."""

    @abstractmethod
    def set_reject_policy(self, policy: RejectPolicy) -> None:
        """Choose what happens when the queue is full."""

    @abstractmethod
    def set_max_queue_size(self, max_size: int) -> None:
        """Bound the queue; zero means unbounded."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of queued tasks."""