"""Timer service: applies timer commands to the running clock and the card.

Handles:
    "set a timer for 5 minutes"
    "two and a half minutes quietly"
    "paused for ten minutes"
    "how much time is left"
    "cancel the timer"

A request is a dict with the same fields the service gets on (re)start:
    voice_results   transcribed phrase, or None to skip the phrase path
    regenerate      True to rebuild from a stored end time
    end_millis      stored end time (epoch ms), regenerate only
    loudly          stored alert preference, regenerate only

Presentation is reported through a callback taking one of "reveal",
"silent", "navigate" or "unpublish". Expiry is announced through the
announce callback, once per timer.
"""

import os
import re
import threading
from datetime import datetime

from voicetimer import tombstone
from voicetimer.clock import Timer, now_millis
from voicetimer.command import TimerCommand
from voicetimer.phrase import parse_phrase
from voicetimer.regenerate import regenerate
from voicetimer.vocab import MILLIS_PER_UNIT, Unit

# Log file: lives next to the voicetimer package directory
_LOG_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "voicetimer.log")

# How often the background checker looks for an expired timer
CHECK_INTERVAL = 0.5  # seconds

NOT_UNDERSTOOD = "Sorry, I didn't understand the duration."


def _log_request(text, command, source="[voice]", path=_LOG_PATH):
    """Append a compact 2-line entry to the log file."""
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    if command is None:
        parse_line = "  -> none"
    else:
        parse_line = (f"  -> duration_millis={command.duration_millis}, "
                      f"starts_running={command.starts_running}, "
                      f"starts_loudly={command.starts_loudly}")
    try:
        with open(path, "a") as f:
            f.write(f"{ts} {source}  {text}\n{parse_line}\n")
    except OSError:
        pass


def format_duration(millis):
    """Speak a duration in whole seconds, e.g. '1 hour, 1 minute and 5 seconds'.

    Every non-zero field is named, so a confirmation repeats exactly what was
    set. Anything under a second (or an expired, negative duration) is
    'less than a second'.
    """
    if millis < MILLIS_PER_UNIT[Unit.SECOND]:
        return "less than a second"
    parts = []
    rest = int(millis)
    for unit in Unit:
        count, rest = divmod(rest, MILLIS_PER_UNIT[unit])
        if count:
            singular, plural = unit.spellings
            parts.append(f"{count} {singular if count == 1 else plural}")
    if len(parts) == 1:
        return parts[0]
    return f"{', '.join(parts[:-1])} and {parts[-1]}"


_CANCEL = re.compile(r"\b(?:cancel|stop|clear)\b", re.IGNORECASE)
_QUERY = re.compile(
    r"\bhow (?:much|long)\b|\b(?:left|remaining)\b", re.IGNORECASE)


def _classify(text):
    """Classify a spoken request: 'cancel', 'query' or 'set'."""
    if _CANCEL.search(text):
        return "cancel"
    if _QUERY.search(text):
        return "query"
    return "set"


class TimerService:
    """Owns the clock, the card state and the tombstone for one timer."""

    def __init__(self, now=now_millis, tombstone_path=tombstone.DEFAULT_PATH,
                 log_path=_LOG_PATH, background=True):
        self._now = now
        self.timer = Timer(now)
        self.tombstone_path = tombstone_path
        self.log_path = log_path
        self.background = background
        self.card = None            # "reveal" or "silent" once published
        self.last_command = None
        self._announced = False
        self._announce_cb = None
        self._present_cb = None
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._checker_thread = None

    def set_announce_callback(self, cb):
        """Set the function to call when the timer expires. cb(text) -> None."""
        self._announce_cb = cb

    def set_present_callback(self, cb):
        """Set the function to call when the card changes. cb(mode) -> None."""
        self._present_cb = cb

    def _present(self, mode):
        if self._present_cb:
            self._present_cb(mode)

    # --- Applying commands ---

    def start_command(self, request):
        """Apply a (re)start request and return the TimerCommand used."""
        command = None
        voice_results = request.get("voice_results")
        if voice_results is not None:
            command = parse_phrase(voice_results)
            self._persist(command)
        if request.get("regenerate", False):
            command = regenerate(request.get("end_millis", 0), self._now(),
                                 request.get("loudly", True))
        if command is None:
            # Nothing new: bring the existing timer back up
            with self._lock:
                command = TimerCommand(self.timer.remaining_millis())
            self._show(command)
            return command
        return self._apply(command)

    def _persist(self, command):
        tombstone.save(self._now() + command.duration_millis,
                       command.starts_loudly, self.tombstone_path)

    def _apply(self, command):
        with self._lock:
            self.timer.reset()
            self.timer.set_duration_millis(command.duration_millis)
            if command.starts_running:
                self.timer.start()
            self.last_command = command
            self._announced = False
        self._show(command)
        if self.background:
            self._start_checker()
        return command

    def _show(self, command):
        if self.card is None:
            self.card = "reveal" if command.starts_loudly else "silent"
            self._present(self.card)
        else:
            self._present("navigate")

    def restore(self):
        """Regenerate the timer from the tombstone, if there is one."""
        stone = tombstone.load(self.tombstone_path)
        if stone is None:
            return None
        return self.start_command({
            "regenerate": True,
            "end_millis": stone.end_millis,
            "loudly": stone.loudly,
        })

    def stop(self):
        """Reset the clock, forget the tombstone and take the card down."""
        with self._lock:
            self.timer.reset()
            self.last_command = None
        tombstone.clear(self.tombstone_path)
        if self.card is not None:
            self.card = None
            self._present("unpublish")

    def shutdown(self):
        self._stop_event.set()

    # --- Spoken interface ---

    def handle(self, text, source="[voice]"):
        """Handle a transcribed request and return the spoken response."""
        cmd = _classify(text)

        if cmd == "cancel":
            _log_request(text, None, source, self.log_path)
            if self.last_command is None:
                return "There is no timer running."
            self.stop()
            return "Your timer has been cancelled."

        if cmd == "query":
            _log_request(text, None, source, self.log_path)
            if self.last_command is None:
                return "There is no timer set."
            with self._lock:
                remaining = self.timer.remaining_millis()
                running = self.timer.is_running
            if remaining <= 0:
                return "Your timer is done."
            suffix = "" if running else ", and it's paused"
            return f"You have {format_duration(remaining)} left{suffix}."

        command = parse_phrase(text)
        _log_request(text, command, source, self.log_path)
        if command.duration_millis <= 0:
            return NOT_UNDERSTOOD
        self._persist(command)
        self._apply(command)
        response = f"Timer set for {format_duration(command.duration_millis)}"
        if not command.starts_running:
            response += ", paused"
        return response + "."

    # --- Expiry ---

    def check_expired(self):
        """Announce the timer once if it has run out. Returns True if announced."""
        with self._lock:
            command = self.last_command
            if (command is None or self._announced or not self.timer.is_running
                    or not self.timer.is_expired()):
                return False
            self._announced = True
            # An expired, beeping timer is surfaced so the user can kill it
            reveal = self.card == "silent"
            if reveal:
                self.card = "reveal"
        if reveal:
            self._present("reveal")
        with self._lock:
            # stop() may have run while the card was being revealed
            if self.last_command is not command:
                return False
        if self._announce_cb:
            self._announce_cb("Your timer is done!")
        return True

    def _check_loop(self):
        while not self._stop_event.wait(CHECK_INTERVAL):
            self.check_expired()

    def _start_checker(self):
        thread = self._checker_thread
        if thread is None or not thread.is_alive():
            self._checker_thread = threading.Thread(
                target=self._check_loop, name="timer-checker", daemon=True)
            self._checker_thread.start()
