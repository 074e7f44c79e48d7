import pytest

from concurrentengine.base import RejectPolicy
from concurrentengine.demo import main, run_future_demo, run_hello, run_reject_test


def test_future_demo_values():
    assert run_future_demo() == (42, 10)


def test_hello():
    assert run_hello() == "Hello from thread pool!"


def test_reject_block_accepts_and_runs_everything():
    accepted, executed = run_reject_test(
        RejectPolicy.BLOCK, task_count=6, task_delay=0.02, settle_time=0.5
    )
    assert accepted == [True] * 6
    assert executed == list(range(6))


def test_reject_throw_runs_only_accepted():
    accepted, executed = run_reject_test(
        RejectPolicy.THROW, task_count=8, task_delay=0.1, settle_time=1.0
    )
    assert accepted[0] is True
    assert False in accepted
    assert executed == [i for i, ok in enumerate(accepted) if ok]


def test_reject_discard_drops_silently():
    accepted, executed = run_reject_test(
        RejectPolicy.DISCARD, task_count=8, task_delay=0.1, settle_time=1.0
    )
    assert accepted == [True] * 8
    assert len(executed) < 8
    assert executed == sorted(executed)
    assert executed[0] == 0


def test_main_future(capsys):
    assert main(["future"]) == 0
    out = capsys.readouterr().out
    assert "fut1 = 42" in out
    assert "fut2 = 10" in out


def test_main_rejects_unknown_demo():
    with pytest.raises(SystemExit):
        main(["nonsense"])