import time
from datetime import timedelta

from concurrentengine.thread import WorkerThread
from concurrentengine.thread_meta import ThreadMeta, ThreadState


def test_new_meta_is_idle():
    meta = ThreadMeta(3)
    assert meta.state is ThreadState.IDLE
    assert meta.is_idle() is True
    assert meta.id == 3


def test_running_then_idle():
    meta = ThreadMeta(1)
    meta.mark_running()
    assert meta.state is ThreadState.RUNNING
    assert meta.is_idle() is False
    meta.mark_idle()
    assert meta.is_idle() is True


def test_mark_idle_refreshes_last_active():
    meta = ThreadMeta(1)
    before = meta.last_active
    time.sleep(0.02)
    meta.mark_idle()
    assert meta.last_active > before


def test_should_recycle_only_when_idle_long_enough():
    meta = ThreadMeta(1)
    time.sleep(0.03)
    assert meta.should_recycle(0) is True
    assert meta.should_recycle(timedelta(seconds=0)) is True
    assert meta.should_recycle(60) is False
    meta.mark_running()
    assert meta.should_recycle(0) is False


def test_termination_states():
    meta = ThreadMeta(2)
    meta.mark_terminating()
    assert meta.state is ThreadState.TERMINATING
    meta.mark_terminated()
    assert meta.state is ThreadState.TERMINATED
    assert meta.is_idle() is False


def test_state_names_follow_transitions():
    meta = ThreadMeta(6)
    names = [str(meta.state)]
    meta.mark_running()
    names.append(str(meta.state))
    meta.mark_terminating()
    names.append(str(meta.state))
    meta.mark_terminated()
    names.append(str(meta.state))
    assert names == ["Idle", "Running", "Terminating", "Terminated"]


def test_join_waits_for_attached_thread():
    seen = []
    worker = WorkerThread(seen.append, thread_id=5)
    meta = ThreadMeta(5, worker)
    worker.start()
    meta.join()
    assert seen == [5]
    assert worker.joinable() is False


def test_join_without_thread_leaves_state():
    meta = ThreadMeta(4)
    meta.join()
    assert meta.state is ThreadState.IDLE