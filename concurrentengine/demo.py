"""Demonstrations of the pool: futures, reject policies and a hello task."""

from __future__ import annotations

import argparse
import time
from typing import List, Optional, Sequence, Tuple

from .base import RejectPolicy
from .fifo import FIFOScheduler
from .pool import ThreadPool
from .priority import TaskPriority

__all__ = ["run_reject_test", "run_future_demo", "run_hello", "main"]


def run_reject_test(
    policy: RejectPolicy,
    task_count: int = 10,
    task_delay: float = 0.2,
    settle_time: float = 5.0,
) -> Tuple[List[bool], List[int]]:
    """Flood a one-worker pool with a queue of two under ``policy``.

    Returns whether each submission was accepted and the indices of the
    tasks that actually ran, in order.
    """
    scheduler = FIFOScheduler()
    scheduler.set_reject_policy(policy)
    scheduler.set_max_queue_size(2)
    pool = ThreadPool(scheduler)
    pool.start(1)

    accepted: List[bool] = []
    executed: List[int] = []

    def job(index: int) -> None:
        print(f"[Task {index}] Executing...")
        executed.append(index)
        time.sleep(task_delay)

    try:
        for index in range(task_count):
            try:
                pool.submit(job, index, priority=TaskPriority.MEDIUM)
            except Exception as exc:
                print(f"[Main] task submit {index} fail: {exc}")
                accepted.append(False)
            else:
                print(f"[Main] task submit {index} success")
                accepted.append(True)
        time.sleep(settle_time)
    finally:
        pool.stop()
    return accepted, executed


def run_future_demo() -> Tuple[int, int]:
    """Return values computed on the pool through futures."""
    scheduler = FIFOScheduler()
    scheduler.set_max_queue_size(10)
    scheduler.set_reject_policy(RejectPolicy.BLOCK)
    with ThreadPool(scheduler) as pool:
        pool.start(2)
        fut1 = pool.submit(lambda: 42)
        fut2 = pool.submit(lambda x, y: x + y, 3, 7)
        first, second = fut1.result(), fut2.result()
        print(f"fut1 = {first}")
        print(f"fut2 = {second}")
    return first, second


def run_hello() -> str:
    """Run a slow greeting on a four-worker pool and return it."""

    def greet() -> str:
        time.sleep(1)
        return "Hello from thread pool!"

    with ThreadPool(FIFOScheduler()) as pool:
        pool.start(4)
        message = pool.submit(greet).result()
        print(message)
    return message


_REJECT_DEMOS = {
    "reject-block": RejectPolicy.BLOCK,
    "reject-discard": RejectPolicy.DISCARD,
    "reject-throw": RejectPolicy.THROW,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="concurrentengine", description="Run a thread pool demonstration."
    )
    parser.add_argument(
        "demo",
        nargs="?",
        default="hello",
        choices=["hello", "future", *_REJECT_DEMOS],
    )
    args = parser.parse_args(argv)
    if args.demo == "hello":
        run_hello()
    elif args.demo == "future":
        run_future_demo()
    else:
        run_reject_test(_REJECT_DEMOS[args.demo])
    return 0