"""Tests for the tokenizer, resolvers and parser beyond the phrase table."""

import itertools

import pytest

from voicetimer import TimerCommand, parse_phrase
from voicetimer.phrase import PhraseParser
from voicetimer.resolvers import Accumulator, Flags, resolve_number
from voicetimer.tokens import TokenStream, tokenize
from voicetimer.vocab import Event, Modifier, Unit


def test_tokenize_splits_on_whitespace_runs():
    assert tokenize("set  a\ttimer\n for 2 minutes") == [
        "set", "a", "timer", "for", "2", "minutes"]


@pytest.mark.parametrize("phrase", [None, "", "   "])
def test_tokenize_empty(phrase):
    assert tokenize(phrase) == []


def test_tokenize_keeps_case():
    assert tokenize("Two MINUTES") == ["Two", "MINUTES"]


def test_peek_past_end_is_none():
    s = TokenStream(["half", "an"])
    assert s.peek() == "half"
    assert s.peek(1) == "an"
    assert s.peek(2) is None
    assert not s.peek_is("half", "an", "hour")
    assert s.peek_is("HALF", "an") is False  # words are given lower-case
    assert s.peek_is("half", "an")


def test_advance_never_passes_end():
    s = TokenStream(["a"])
    s.advance(5)
    assert s.pos == 1
    assert s.done


@pytest.mark.parametrize("phrase", ["", "2", "half", "half an", "2 and",
                                    "2 and a", "2 and a half", "sixty",
                                    "1&a", "a", "paused",
                                    "9" * 5000 + " minutes",
                                    "1234567890 seconds"])
def test_short_phrases_never_fail(phrase):
    cmd = parse_phrase(phrase)
    assert cmd.duration_millis >= 0


def test_every_short_sequence_parses():
    vocab = ["half", "an", "hour", "and", "a", "2", "minutes", "sixty",
             "one", "1&a", "quietly", "x"]
    for n in range(5):
        for tokens in itertools.product(vocab, repeat=n):
            parser = PhraseParser(list(tokens))
            cmd = parser.run()
            assert parser.stream.pos == len(tokens)
            assert cmd.duration_millis >= 0


def test_empty_phrase_gives_defaults():
    assert parse_phrase("") == TimerCommand(0, True, True)
    assert parse_phrase(None) == TimerCommand(0, True, True)


def test_parse_is_repeatable():
    phrase = "two and a half hours quietly"
    assert parse_phrase(phrase) == parse_phrase(phrase)
    assert parse_phrase(phrase) == TimerCommand(9000000, True, False)


def test_parser_keeps_no_state_between_phrases():
    parse_phrase("paused quietly 5 hours")
    assert parse_phrase("2 minutes") == TimerCommand(120000, True, True)


def test_duration_matches_accumulator():
    parser = PhraseParser(tokenize("1 hour 2 minutes 3 seconds"))
    cmd = parser.run()
    acc = parser.accumulator
    assert (acc.hours, acc.minutes, acc.seconds) == (1, 2, 3)
    assert cmd.duration_millis == acc.hours * 3_600_000 + acc.minutes * 60_000 + acc.seconds * 1_000


def test_flags_only_turn_off():
    flags = Flags()
    flags.pause()
    flags.quiet()
    flags.pause()
    assert flags == Flags(starts_running=False, starts_loudly=False)


def test_accumulator_half_rules():
    acc = Accumulator()
    acc.apply(Unit.HOUR, 2, half=True)
    assert (acc.hours, acc.minutes, acc.seconds) == (2, 30, 0)
    acc.apply(Unit.MINUTE, 4, half=True)
    assert (acc.hours, acc.minutes, acc.seconds) == (2, 4, 30)
    acc.apply(Unit.SECOND, 10, half=True)
    assert acc.seconds == 11


def test_vocab_matching():
    assert Unit.match("Hours") is Unit.HOUR
    assert Unit.match("minute") is Unit.MINUTE
    assert Unit.match("secs") is None
    assert Unit.match(None) is None
    assert Modifier.match("Pause") is Modifier.PAUSED
    assert Modifier.match("quiet") is None


def test_resolve_number_variants():
    assert resolve_number(TokenStream(["42"])).value == 42
    assert resolve_number(TokenStream(["An"])).value == 1
    n = resolve_number(TokenStream(["1&A"]))
    assert (n.value, n.half) == (1, True)
    n = resolve_number(TokenStream(["sixty", "one"]))
    assert (n.value, n.consumed) == (61, 2)
    n = resolve_number(TokenStream(["sixty", "minutes"]))
    assert (n.value, n.consumed) == (60, 1)
    assert resolve_number(TokenStream(["thirty-two"])).value == 32
    assert resolve_number(TokenStream(["five-minute"])) is None
    assert resolve_number(TokenStream(["timer"])) is None
    assert resolve_number(TokenStream([])) is None


def test_report_channel():
    events = []
    cmd = parse_phrase("for 2 and a half minutes quietly banana",
                       report=lambda event, token: events.append((event, token)))
    kinds = [e for e, _ in events]
    assert kinds == [Event.LEADING_FOR, Event.DIGITS, Event.AND_A_HALF,
                     Event.UNIT, Event.QUIETLY, Event.UNPARSED]
    assert events[-1] == (Event.UNPARSED, "banana")
    assert cmd == TimerCommand(150000, True, False)


def test_report_out_of_range_and_missing_unit():
    events = []
    parse_phrase("sixty one seconds 5", report=lambda e, t: events.append(e))
    assert Event.OUT_OF_RANGE in events
    assert events[-1] is Event.NO_UNIT


def test_report_does_not_change_result():
    phrase = "paused for 1&a minutes"
    assert parse_phrase(phrase, report=lambda e, t: None) == parse_phrase(phrase)


def test_overlong_digit_run_is_not_a_number():
    assert parse_phrase("9" * 5000 + " minutes") == TimerCommand(0, True, True)
    assert resolve_number(TokenStream(["1234567890"])) is None
    assert resolve_number(TokenStream(["123456789"])).value == 123456789
    assert parse_phrase("1234567890 5 minutes").duration_millis == 300000
