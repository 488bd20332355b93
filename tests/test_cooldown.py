# tests/test_cooldown.py
from cooldown import CooldownTracker


def test_first_message_admitted():
    assert CooldownTracker().admit('1', 5000)


def test_within_interval_rejected_and_not_recorded():
    tracker = CooldownTracker()
    assert tracker.admit('1', 5000)
    assert not tracker.admit('1', 5999)
    assert tracker.last_accepted['1'] == 5000
    assert tracker.admit('1', 6000)
    assert tracker.last_accepted['1'] == 6000


def test_users_are_independent():
    tracker = CooldownTracker()
    assert tracker.admit('1', 5000)
    assert tracker.admit('2', 5001)
    assert tracker.admit(3, 5002)
    assert not tracker.admit('3', 5003)


def test_custom_interval():
    tracker = CooldownTracker(interval_ms=50)
    assert tracker.admit('1', 0)
    assert tracker.admit('1', 50)
