"""Tests for the countdown clock and the tombstone store."""

import json

from voicetimer import tombstone
from voicetimer.clock import Timer


class FakeNow:
    def __init__(self, t=0):
        self.t = t

    def __call__(self):
        return self.t


def test_timer_counts_down_while_running():
    now = FakeNow(1000)
    timer = Timer(now)
    timer.set_duration_millis(5000)
    assert timer.remaining_millis() == 5000
    timer.start()
    now.t += 2000
    assert timer.remaining_millis() == 3000
    assert not timer.is_expired()
    now.t += 3000
    assert timer.is_expired()


def test_pause_and_resume():
    now = FakeNow()
    timer = Timer(now)
    timer.set_duration_millis(10000)
    timer.start()
    now.t = 4000
    timer.pause()
    now.t = 9000
    assert timer.remaining_millis() == 6000
    assert not timer.is_running
    timer.start()
    now.t = 10000
    assert timer.remaining_millis() == 5000


def test_reset_and_new_duration():
    now = FakeNow()
    timer = Timer(now)
    timer.set_duration_millis(1000)
    timer.start()
    now.t = 500
    timer.set_duration_millis(2000)
    assert timer.is_running
    assert timer.remaining_millis() == 2000
    timer.reset()
    assert not timer.is_running
    assert timer.elapsed_millis() == 0


def test_negative_duration_is_expired():
    timer = Timer(FakeNow())
    timer.set_duration_millis(-300)
    timer.start()
    assert timer.is_expired()


def test_tombstone_round_trip(tmp_path):
    path = tmp_path / "data" / "timer_tombstone.json"
    tombstone.save(123456, False, path)
    assert json.loads(path.read_text()) == {"end_millis": 123456, "loudly": False}
    assert tombstone.load(path) == tombstone.Tombstone(123456, False)
    assert not path.with_suffix(".tmp").exists()


def test_tombstone_missing_or_corrupt(tmp_path):
    path = tmp_path / "timer_tombstone.json"
    assert tombstone.load(path) is None
    path.write_text("{not json")
    assert tombstone.load(path) is None
    path.write_text(json.dumps({"loudly": True}))
    assert tombstone.load(path) is None
    path.write_text(json.dumps([1, 2]))
    assert tombstone.load(path) is None


def test_tombstone_clear(tmp_path):
    path = tmp_path / "timer_tombstone.json"
    tombstone.save(1, True, path)
    tombstone.clear(path)
    assert not path.exists()
    tombstone.clear(path)  # already gone
