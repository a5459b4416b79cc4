"""Running countdown clock behind the timer card.

Times are epoch milliseconds from a `now` callable, so tests can drive the
clock by hand.
"""

import time


def now_millis():
    return int(time.time() * 1000)


class Timer:
    """A countdown that can be started, paused and reset.

    The duration may be zero or negative (a regenerated timer that already
    ran out); such a timer is expired as soon as it is started.
    """

    def __init__(self, now=now_millis):
        self._now = now
        self._duration = 0
        self._started_at = None   # set while running
        self._elapsed = 0         # time run before the last pause

    @property
    def duration_millis(self):
        return self._duration

    @property
    def is_running(self):
        return self._started_at is not None

    def set_duration_millis(self, millis):
        """Set a new duration and rewind. A running clock keeps running."""
        self._duration = int(millis)
        self._elapsed = 0
        if self.is_running:
            self._started_at = self._now()

    def start(self):
        if not self.is_running:
            self._started_at = self._now()

    def pause(self):
        if self.is_running:
            self._elapsed += self._now() - self._started_at
            self._started_at = None

    def reset(self):
        self._started_at = None
        self._elapsed = 0

    def elapsed_millis(self):
        if self.is_running:
            return self._elapsed + self._now() - self._started_at
        return self._elapsed

    def remaining_millis(self):
        return self._duration - self.elapsed_millis()

    def is_expired(self):
        return self.remaining_millis() <= 0

    def __repr__(self):
        state = "running" if self.is_running else "stopped"
        return f"Timer({state}, remaining={self.remaining_millis()}ms)"
