"""Phrase parser: turns a transcribed timer request into a TimerCommand.

Handles:
    "2 minutes"
    "set a timer for two and a half minutes quietly"
    "half an hour"
    "paused for five minutes"
    "1&a minutes"          (STT's rendering of "one and a half minutes")

Parsing is lenient. Words outside the vocabulary are skipped, and a phrase
that matches nothing gives a zero-length command with the default flags.
"""

from voicetimer.command import TimerCommand
from voicetimer.resolvers import (
    Accumulator, Flags, in_range, resolve_half_an_hour, resolve_modifier,
    resolve_number, resolve_trailing_half, resolve_unit,
)
from voicetimer.tokens import TokenStream, tokenize
from voicetimer.vocab import Event


class PhraseParser:
    """Single left-to-right pass over a token list.

    A parser is used once; accumulator and flags hold the result after run().
    """

    def __init__(self, tokens, report=None):
        self.stream = TokenStream(tokens)
        self.accumulator = Accumulator()
        self.flags = Flags()
        self.report = report

    def _emit(self, event, token):
        if self.report is not None:
            self.report(event, token)

    def run(self):
        s = self.stream
        while not s.done:
            number = resolve_number(s, self.report)
            if number is not None:
                self._apply_number(number)
            elif resolve_half_an_hour(s, self.accumulator, self.report):
                pass
            elif resolve_modifier(s, self.flags, self.report):
                pass
            else:
                token = s.peek()
                if s.pos == 0 and token.lower() == "for":
                    self._emit(Event.LEADING_FOR, token)
                else:
                    self._emit(Event.UNPARSED, token)
                s.advance()
        return self.command()

    def _apply_number(self, number):
        s = self.stream
        s.advance(number.consumed)
        if not in_range(number.value):
            self._emit(Event.OUT_OF_RANGE, str(number.value))
            return
        half = number.half
        if resolve_trailing_half(s, self.report):
            half = True
        resolve_unit(s, number.value, half, self.accumulator, self.report)

    def command(self):
        return TimerCommand(
            duration_millis=self.accumulator.millis(),
            starts_running=self.flags.starts_running,
            starts_loudly=self.flags.starts_loudly,
        )


def parse_phrase(phrase, report=None):
    """Parse a transcribed phrase into a TimerCommand."""
    return PhraseParser(tokenize(phrase), report).run()


# --- Standalone test ---

if __name__ == "__main__":
    tests = [
        "2 minutes",
        "1&a minutes",
        "half an hour",
        "two and a half hours quietly",
        "paused for five minutes",
        "sixty one seconds",
        "set a timer for 2 and a half",
        "half an",
        "",
    ]
    for t in tests:
        cmd = parse_phrase(t)
        print(f"  {t!r:40s} => {cmd.duration_millis} ms"
              f" running={cmd.starts_running} loudly={cmd.starts_loudly}")
