import threading

from lspkit.condition import Condition


def test_notify_then_wait_returns_value():
    cond = Condition()
    cond.notify("ready")
    assert cond.wait() == "ready"


def test_wait_with_timeout_returns_none_when_empty():
    cond = Condition()
    assert cond.wait(20) is None


def test_value_is_consumed_by_wait():
    cond = Condition()
    cond.notify(True)
    assert cond.wait(20) is True
    assert cond.wait(20) is None


def test_later_notify_replaces_earlier_value():
    cond = Condition()
    cond.notify("first")
    cond.notify("second")
    assert cond.wait(20) == "second"


def test_blocking_waiter_is_woken_by_other_thread():
    cond = Condition()
    notifier = threading.Timer(0.05, cond.notify, args=("done",))
    notifier.start()
    try:
        assert cond.wait() == "done"
    finally:
        notifier.join()


def test_timed_waiter_receives_value_sent_during_wait():
    cond = Condition()
    timer = threading.Timer(0.05, cond.notify, args=("late",))
    timer.start()
    try:
        assert cond.wait(5000) == "late"
    finally:
        timer.join()