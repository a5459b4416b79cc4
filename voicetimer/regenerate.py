"""Rebuild a TimerCommand for a timer that was running before a restart."""

from voicetimer.command import TimerCommand


def regenerate(end_millis, now_millis, loudly=True):
    """Command for a stored end time, as seen at now_millis.

    The duration is end - now and may be zero or negative for a timer that
    already expired; the caller decides whether to alarm straight away.
    A timer that has not yet expired is always shown loudly on resume.
    """
    end_millis = int(end_millis)
    now_millis = int(now_millis)
    return TimerCommand(
        duration_millis=end_millis - now_millis,
        starts_running=True,
        starts_loudly=bool(loudly) or end_millis > now_millis,
    )
