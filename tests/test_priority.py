import threading
import time

import pytest

from concurrentengine.base import RejectPolicy, TaskRejectedError
from concurrentengine.priority import PriorityScheduler, TaskPriority


def _task(log, name):
    return lambda: log.append(name)


def test_priority_order_from_mixed_submissions():
    sched = PriorityScheduler()
    sched.set_reject_policy(RejectPolicy.BLOCK)
    sched.set_max_queue_size(5)
    log = []
    sched.add_task(_task(log, "Low Priority"), TaskPriority.LOW)
    sched.add_task(_task(log, "High Priority"), TaskPriority.HIGH)
    sched.add_task(_task(log, "Medium Priority"), TaskPriority.MEDIUM)
    sched.add_task(_task(log, "High Priority 2"), TaskPriority.HIGH)
    sched.add_task(_task(log, "Low Priority 2"), TaskPriority.LOW)
    assert len(sched) == 5
    for _ in range(5):
        sched.get_task()()
    assert log == [
        "High Priority",
        "High Priority 2",
        "Medium Priority",
        "Low Priority",
        "Low Priority 2",
    ]


def test_default_priority_is_medium():
    sched = PriorityScheduler()
    sched.add_task(lambda: None)
    sizes = sched.queue_sizes()
    assert sizes[TaskPriority.MEDIUM] == 1
    assert sizes[TaskPriority.HIGH] == 0
    assert sizes[TaskPriority.LOW] == 0


def test_throw_policy_counts_all_priorities():
    sched = PriorityScheduler(max_queue_size=2, reject_policy=RejectPolicy.THROW)
    sched.add_task(lambda: None, TaskPriority.HIGH)
    sched.add_task(lambda: None, TaskPriority.LOW)
    with pytest.raises(TaskRejectedError):
        sched.add_task(lambda: None, TaskPriority.MEDIUM)
    assert len(sched) == 2


def test_discard_policy_returns_false():
    sched = PriorityScheduler(max_queue_size=1, reject_policy=RejectPolicy.DISCARD)
    assert sched.add_task(lambda: None) is True
    assert sched.add_task(lambda: None, TaskPriority.HIGH) is False
    assert sched.queue_sizes()[TaskPriority.HIGH] == 0


def test_block_policy_unblocks_after_get():
    sched = PriorityScheduler(max_queue_size=1)
    sched.add_task(lambda: None)
    producer = threading.Thread(target=sched.add_task, args=(lambda: None, TaskPriority.LOW))
    producer.start()
    time.sleep(0.1)
    assert producer.is_alive()
    sched.get_task()
    producer.join(timeout=2)
    assert not producer.is_alive()
    assert sched.queue_sizes()[TaskPriority.LOW] == 1


def test_shutdown_returns_none_when_empty():
    sched = PriorityScheduler()
    log = []
    sched.add_task(_task(log, "left"), TaskPriority.LOW)
    sched.shutdown()
    sched.get_task()()
    assert log == ["left"]
    assert sched.get_task() is None


def test_report_status_lists_each_queue(capsys):
    sched = PriorityScheduler()
    sched.add_task(lambda: None, TaskPriority.HIGH)
    sched.add_task(lambda: None, TaskPriority.HIGH)
    capsys.readouterr()
    sched.report_status()
    out = capsys.readouterr().out
    assert "  - HIGH   : 2" in out
    assert "  - TOTAL  : 2" in out