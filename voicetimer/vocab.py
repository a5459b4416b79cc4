"""Fixed vocabulary for spoken timer requests.

Everything the phrase parser recognises lives here: time units, the flag
modifiers, number words, and the diagnostic events reported while parsing.
Words are compared lower-cased.
"""

from enum import Enum


class Unit(Enum):
    HOUR = ("hour", "hours")
    MINUTE = ("minute", "minutes")
    SECOND = ("second", "seconds")

    @property
    def spellings(self):
        return self.value

    @classmethod
    def match(cls, token):
        """Return the Unit spelled by token, or None."""
        if token is None:
            return None
        word = token.lower()
        for unit in cls:
            if word in unit.spellings:
                return unit
        return None


class Modifier(Enum):
    PAUSED = ("paused", "pause")
    QUIETLY = ("quietly",)

    @property
    def spellings(self):
        return self.value

    @classmethod
    def match(cls, token):
        """Return the Modifier spelled by token, or None."""
        word = token.lower()
        for modifier in cls:
            if word in modifier.spellings:
                return modifier
        return None


class Event(Enum):
    """Diagnostic events reported by the resolvers. Never affect the result."""
    DIGITS = "parsed digits"
    ALIAS_ONE = "parsed non-numeric variant of 'one'"
    ONE_AND_A_HALF = "parsed '1&a' speech token as one and a half"
    NUMBER_WORD = "parsed number word"
    LEADING_FOR = "ignoring a leading 'for'"
    AND_A_HALF = "handled 'X and a half'"
    HALF_AN_HOUR = "handled 'half an hour'"
    UNIT = "applied unit"
    OUT_OF_RANGE = "number out of range, dropped"
    NO_UNIT = "no unit after number, dropped"
    PAUSED = "timer starts paused"
    QUIETLY = "timer starts quietly"
    UNPARSED = "token not parsed"


# Speech-to-text renders "one" as a word more often than a digit
ALIASES_FOR_ONE = ("one", "an", "a")

# Observed STT mangling of "one and a half"
ONE_AND_A_HALF_TOKEN = "1&a"

ONES = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
    "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14,
    "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18,
    "nineteen": 19,
}

TENS = {
    "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
}

# Range a number must fall in to be applied to a unit (inclusive)
MIN_CANDIDATE = 0
MAX_CANDIDATE = 60

HALF_IDIOM = ("and", "a", "half")
HALF_AN_HOUR_IDIOM = ("half", "an", "hour")

MILLIS_PER_UNIT = {
    Unit.HOUR: 60 * 60 * 1000,
    Unit.MINUTE: 60 * 1000,
    Unit.SECOND: 1000,
}
