"""Tests for rebuilding a timer command from a stored end time."""

from voicetimer import TimerCommand, regenerate


def test_remaining_duration():
    cmd = regenerate(10000, 4000)
    assert cmd == TimerCommand(6000, starts_running=True, starts_loudly=True)


def test_expired_timer_surfaces():
    cmd = regenerate(4000, 10000)
    assert cmd.duration_millis == -6000
    assert cmd.starts_running is True
    assert cmd.starts_loudly is True
    assert cmd.expired


def test_exactly_now_is_zero():
    cmd = regenerate(5000, 5000)
    assert cmd.duration_millis == 0
    assert cmd.expired


def test_pending_timer_is_loud_even_if_stored_quiet():
    assert regenerate(10000, 4000, loudly=False).starts_loudly is True


def test_expired_timer_keeps_stored_preference():
    assert regenerate(4000, 10000, loudly=False).starts_loudly is False
    assert regenerate(5000, 5000, loudly=False).starts_loudly is False


def test_always_starts_running():
    for end, now in [(0, 0), (1, 0), (0, 1)]:
        assert regenerate(end, now, loudly=False).starts_running is True
