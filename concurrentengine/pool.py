"""Thread pool that pulls work from a pluggable scheduler."""

from __future__ import annotations

import itertools
import threading
from concurrent.futures import Future
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from .base import Scheduler, Task
from .dag import DAGScheduler, TaskNode
from .logger import LogLevel, get_logger, log_error, log_info
from .priority import PriorityScheduler, TaskPriority
from .thread_meta import ThreadMeta

__all__ = ["PoolMode", "SubmitError", "ThreadPool"]


class PoolMode(Enum):
    """Sizing strategy of a pool."""

    SINGLE = "single"
    FIXED = "fixed"
    CACHED = "cached"


class SubmitError(RuntimeError):
    """Raised when a task cannot be handed to the pool."""


class ThreadPool:
    """Fixed set of worker threads fed by a scheduler."""

    def __init__(
        self, scheduler: Optional[Scheduler] = None, mode: PoolMode = PoolMode.FIXED
    ) -> None:
        self._scheduler = scheduler
        self.mode = mode
        self._lock = threading.Lock()
        self._running = False
        self._workers: List[threading.Thread] = []
        self._metas: Dict[int, ThreadMeta] = {}
        self._active = 0
        self._free = 0
        self._pending = 0
        self._dag_nodes: Set[TaskNode] = set()

    @property
    def scheduler(self) -> Optional[Scheduler]:
        return self._scheduler

    @scheduler.setter
    def scheduler(self, scheduler: Optional[Scheduler]) -> None:
        self._scheduler = scheduler

    @property
    def running(self) -> bool:
        return self._running

    @property
    def thread_count(self) -> int:
        """Worker threads currently alive."""
        with self._lock:
            return self._active

    @property
    def free_thread_count(self) -> int:
        """Worker threads waiting for work."""
        with self._lock:
            return self._free

    @property
    def task_count(self) -> int:
        """Tasks accepted and not yet started."""
        with self._lock:
            return self._pending

    @property
    def queue_size(self) -> int:
        return len(self._scheduler) if self._scheduler is not None else 0

    def start(self, thread_count: int) -> None:
        """Launch ``thread_count`` workers; does nothing if already running."""
        if self._running:
            return
        if self._scheduler is None:
            raise ValueError("[ThreadPool] Cannot start without a scheduler")
        logger = get_logger()
        logger.log(f"[ThreadPool] Starting with {thread_count} threads.")
        ids = itertools.count()
        with self._lock:
            self._metas = {}
            self._active = self._free = self._pending = 0
        self._workers = []
        self._running = True
        for _ in range(thread_count):
            thread_id = next(ids)
            meta = ThreadMeta(thread_id)
            with self._lock:
                self._metas[thread_id] = meta
            worker = threading.Thread(
                target=self._worker,
                args=(thread_id,),
                name=f"pool-worker-{thread_id}",
                daemon=True,
            )
            self._workers.append(worker)
            worker.start()
        logger.log("[ThreadPool] State set to running.")

    def stop(self) -> None:
        """Stop the workers after their current task and wait for them."""
        if not self._running:
            return
        self._running = False
        if self._scheduler is not None:
            self._scheduler.shutdown()
        logger = get_logger()
        logger.log("[ThreadPool] Stopping...")
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()
        logger.log("[ThreadPool] All worker threads joined.")

    def report_status(self) -> None:
        print(
            "[ThreadPool Status]\n"
            f" - Active Threads: {self.thread_count}\n"
            f" - Free Threads  : {self.free_thread_count}\n"
            f" - Total Tasks   : {self.task_count}\n"
            f" - Scheduler Queue Size: {self.queue_size}"
        )

    def thread_meta(self, thread_id: int) -> Optional[ThreadMeta]:
        """Bookkeeping of worker ``thread_id``, or None if unknown."""
        with self._lock:
            return self._metas.get(thread_id)

    def _worker(self, thread_id: int) -> None:
        logger = get_logger()
        meta = self.thread_meta(thread_id)
        if meta is None:
            logger.log("[Worker] Error: No ThreadMeta found", LogLevel.INFO, thread_id)
            return
        logger.log("[Worker] Thread started", LogLevel.INFO, thread_id)
        scheduler = self._scheduler
        with self._lock:
            self._active += 1
            self._free += 1
        try:
            while self._running:
                task = scheduler.get_task()
                if task is None:
                    if not self._running:
                        break
                    continue
                with self._lock:
                    self._free -= 1
                    self._pending = max(0, self._pending - 1)
                meta.mark_running()
                logger.log("[Worker] Task started", LogLevel.INFO, thread_id)
                try:
                    task()
                except Exception as exc:
                    logger.log(f"[Worker] Task exception: {exc}", LogLevel.INFO, thread_id)
                logger.log("[Worker] Task finished", LogLevel.INFO, thread_id)
                meta.mark_idle()
                with self._lock:
                    self._free += 1
        finally:
            with self._lock:
                self._active -= 1
                self._free -= 1
        meta.mark_terminating()
        logger.log("[Worker] Thread exiting", LogLevel.INFO, thread_id)
        meta.mark_terminated()

    def _enqueue(self, task: Task, priority: TaskPriority) -> Optional[bool]:
        """None if refused, False if the scheduler discarded it, True if queued."""
        logger = get_logger()
        scheduler = self._scheduler
        if scheduler is None:
            logger.log("[ThreadPool] Submit failed: No scheduler.")
            return None
        if not self._running:
            logger.log("[ThreadPool] Submit failed: Not running.")
            return None
        logger.log(f"[ThreadPool] Task submitted with priority {priority.value}")
        if isinstance(scheduler, DAGScheduler):
            logger.log("[ThreadPool] DAG Scheduler does not accept plain Task submit.")
            return None
        with self._lock:
            self._pending += 1
        try:
            if isinstance(scheduler, PriorityScheduler):
                accepted = scheduler.add_task(task, priority)
            else:
                accepted = scheduler.add_task(task)
        except BaseException:
            with self._lock:
                self._pending -= 1
            raise
        if accepted is False:
            with self._lock:
                self._pending -= 1
            return False
        return True

    def submit_task(self, task: Task, priority: TaskPriority = TaskPriority.MEDIUM) -> bool:
        """Hand a plain callable to the scheduler; False if the pool refuses it."""
        return self._enqueue(task, priority) is not None

    def submit(
        self,
        func: Callable[..., Any],
        *args: Any,
        priority: TaskPriority = TaskPriority.MEDIUM,
        name: str = "UnnamedTask",
        **kwargs: Any,
    ) -> "Future[Any]":
        """Run ``func(*args, **kwargs)`` on the pool and return a future of its result."""
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except BaseException as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

        get_logger().log(f"[submit] {name} (priority={priority.value})")
        accepted = self._enqueue(run, priority)
        if accepted is None:
            raise SubmitError("[ThreadPool::submit] Submit failed")
        if not accepted:
            future.set_exception(SubmitError("[ThreadPool::submit] Task discarded (queue full)"))
        return future

    def submit_node(
        self, node: Optional[TaskNode], dependencies: Iterable[Optional[TaskNode]] = ()
    ) -> bool:
        """Add a graph node that runs after ``dependencies``; needs a DAG scheduler."""
        scheduler = self._scheduler
        if scheduler is None or not self._running:
            return False
        log_info("==== submitDAG ====")
        if not isinstance(scheduler, DAGScheduler):
            log_error("[ThreadPool] Current scheduler is not DAG.")
            return False
        if node is None or node.task is None:
            log_error("[ThreadPool] ERROR: submitDAG received invalid task.")
            return False
        with self._lock:
            self._pending += 1
        scheduler.add_node(node, dependencies)
        get_logger().log("[ThreadPool] DAG task submitted.")
        return True

    def submit_dag(
        self,
        func: Callable[[], Any],
        dependencies: Iterable[Optional[TaskNode]] = (),
        name: str = "UnnamedDAGTask",
    ) -> "Future[Any]":
        """Run ``func`` once ``dependencies`` have completed; return a future of its result."""
        future: Future = Future()
        node = TaskNode()

        def run() -> None:
            try:
                if future.set_running_or_notify_cancel():
                    try:
                        result = func()
                    except BaseException as exc:
                        future.set_exception(exc)
                    else:
                        future.set_result(result)
            finally:
                with self._lock:
                    self._dag_nodes.discard(node)

        node.task = run
        get_logger().log(f"[submitDAG] {name}")
        with self._lock:
            self._dag_nodes.add(node)
        if not self.submit_node(node, dependencies):
            with self._lock:
                self._dag_nodes.discard(node)
            raise SubmitError("[ThreadPool::submitDAG] Submit DAG task failed")
        return future

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()