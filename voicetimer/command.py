"""Timer command value produced by the phrase parser and regenerate path.

The service applies a TimerCommand: persists it, starts (or doesn't start)
the clock, and shows or silently attaches the timer card.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TimerCommand:
    duration_millis: int        # may be <= 0 on the regenerate path
    starts_running: bool = True
    starts_loudly: bool = True

    @property
    def expired(self):
        return self.duration_millis <= 0
