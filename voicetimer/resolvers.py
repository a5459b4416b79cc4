"""Per-token resolvers driven by the phrase parser.

Each resolver looks at the token under the stream cursor (and, where an
idiom needs it, a bounded lookahead), and either matches, advancing the
cursor past exactly the tokens it consumed, or leaves the cursor alone.

Every resolver takes an optional report(event, token) callable, the
diagnostic channel. Reports never change what gets parsed.
"""

import re
from dataclasses import dataclass

from voicetimer.vocab import (
    ALIASES_FOR_ONE, HALF_AN_HOUR_IDIOM, HALF_IDIOM, MAX_CANDIDATE,
    MILLIS_PER_UNIT, MIN_CANDIDATE, ONE_AND_A_HALF_TOKEN, ONES, TENS,
    Event, Modifier, Unit,
)

# Longer digit runs would not fit a 32-bit int; they are not read as numbers
_DIGITS = re.compile(r"[+-]?[0-9]{1,9}")


def _report(report, event, token):
    if report is not None:
        report(event, token)


# --- Parse state ---

@dataclass
class Number:
    value: int
    consumed: int = 1     # tokens spelling the number
    half: bool = False    # "1&a" carries its own half


@dataclass
class Accumulator:
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def apply(self, unit, value, half=False):
        """Write value into the field for unit. Overwrites, never sums."""
        if unit is Unit.HOUR:
            self.hours = value
            if half:
                self.minutes = 30
        elif unit is Unit.MINUTE:
            self.minutes = value
            if half:
                self.seconds = 30
        elif unit is Unit.SECOND:
            self.seconds = value
            if half:
                self.seconds += 1  # no sub-second timers; round the half up
        else:
            raise ValueError(f"unknown unit: {unit!r}")

    def millis(self):
        return (self.hours * MILLIS_PER_UNIT[Unit.HOUR]
                + self.minutes * MILLIS_PER_UNIT[Unit.MINUTE]
                + self.seconds * MILLIS_PER_UNIT[Unit.SECOND])


@dataclass
class Flags:
    """Initial timer state. Modifiers only ever turn these off."""
    starts_running: bool = True
    starts_loudly: bool = True

    def pause(self):
        self.starts_running = False

    def quiet(self):
        self.starts_loudly = False


# --- Resolvers ---

def resolve_number(stream, report=None):
    """Read a number at the cursor. Returns a Number or None.

    Does not advance; the caller advances by Number.consumed.
    """
    token = stream.peek()
    if token is None:
        return None
    word = token.lower()

    if _DIGITS.fullmatch(token):
        _report(report, Event.DIGITS, token)
        return Number(int(token))

    if word in ALIASES_FOR_ONE:
        _report(report, Event.ALIAS_ONE, token)
        return Number(1)

    if word == ONE_AND_A_HALF_TOKEN:
        _report(report, Event.ONE_AND_A_HALF, token)
        return Number(1, half=True)

    # "twenty-five"
    tens, dash, ones = word.partition("-")
    if dash:
        if tens in TENS and 1 <= ONES.get(ones, 0) <= 9:
            _report(report, Event.NUMBER_WORD, token)
            return Number(TENS[tens] + ONES[ones])
        return None

    if word in TENS:
        # "sixty one"
        nxt = stream.peek(1)
        if nxt is not None and 1 <= ONES.get(nxt.lower(), 0) <= 9:
            _report(report, Event.NUMBER_WORD, f"{token} {nxt}")
            return Number(TENS[word] + ONES[nxt.lower()], consumed=2)
        _report(report, Event.NUMBER_WORD, token)
        return Number(TENS[word])

    if word in ONES:
        _report(report, Event.NUMBER_WORD, token)
        return Number(ONES[word])

    return None


def in_range(value):
    return MIN_CANDIDATE <= value <= MAX_CANDIDATE


def resolve_trailing_half(stream, report=None):
    """Consume "and a half" at the cursor. Returns True if it was there."""
    if not stream.peek_is(*HALF_IDIOM):
        return False
    _report(report, Event.AND_A_HALF, " ".join(HALF_IDIOM))
    stream.advance(len(HALF_IDIOM))
    return True


def resolve_half_an_hour(stream, acc, report=None):
    """Consume "half an hour" at the cursor, setting 30 minutes."""
    if not stream.peek_is(*HALF_AN_HOUR_IDIOM):
        return False
    acc.minutes = 30
    _report(report, Event.HALF_AN_HOUR, " ".join(HALF_AN_HOUR_IDIOM))
    stream.advance(len(HALF_AN_HOUR_IDIOM))
    return True


def resolve_unit(stream, candidate, half, acc, report=None):
    """Apply candidate (and a pending half) to the unit at the cursor.

    With no unit there, the candidate and half are dropped and the cursor
    stays put so the token can be looked at again.
    """
    token = stream.peek()
    unit = Unit.match(token)
    if unit is None:
        _report(report, Event.NO_UNIT, token)
        return False
    acc.apply(unit, candidate, half)
    _report(report, Event.UNIT, f"{candidate}{' and a half' if half else ''} {token}")
    stream.advance()
    return True


def resolve_modifier(stream, flags, report=None):
    """Consume "paused"/"pause"/"quietly" at the cursor."""
    token = stream.peek()
    if token is None:
        return False
    modifier = Modifier.match(token)
    if modifier is Modifier.PAUSED:
        flags.pause()
        _report(report, Event.PAUSED, token)
    elif modifier is Modifier.QUIETLY:
        flags.quiet()
        _report(report, Event.QUIETLY, token)
    else:
        return False
    stream.advance()
    return True
