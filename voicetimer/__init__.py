from voicetimer.command import TimerCommand
from voicetimer.phrase import PhraseParser, parse_phrase
from voicetimer.regenerate import regenerate

__all__ = ["TimerCommand", "PhraseParser", "parse_phrase", "regenerate"]
