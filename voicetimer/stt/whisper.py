"""Speech-to-text for timer requests using faster-whisper.

Transcribes int16 audio (16 kHz mono) and cleans the text so words reach
the phrase parser without sentence punctuation ("5 minutes." -> "5 minutes").

Usage (standalone test, records from the mic):
    python -m voicetimer.stt.whisper
"""

import os
import re

import numpy as np

# Workaround for OpenMP duplicate library conflict (torch + ctranslate2 on macOS)
os.environ.setdefault("KMP_DUPLICATE_LIB_OK", "TRUE")

from faster_whisper import WhisperModel

DEFAULT_MODEL_SIZE = "small"
DEFAULT_COMPUTE_TYPE = "int8"

# Nudges the decoder toward the words the timer understands
TIMER_PROMPT = ("Set a timer for two and a half minutes. Half an hour quietly. "
                "Ten seconds, paused.")

# Sentence punctuation stuck to a word; "&" stays for the "1&a" token
_EDGE_PUNCT = re.compile(r"^[\"'(\[]+|[\"')\].,!?;:]+$")

_model = None


def load_model(model_size=DEFAULT_MODEL_SIZE, compute_type=DEFAULT_COMPUTE_TYPE):
    """Load the Whisper model. Caches on first call."""
    global _model
    if _model is None:
        _model = WhisperModel(model_size, device="cpu", compute_type=compute_type)
    return _model


def clean_transcript(text):
    """Strip punctuation from the edges of each word and collapse spaces."""
    words = (_EDGE_PUNCT.sub("", w) for w in text.split())
    return " ".join(w for w in words if w)


def transcribe(audio, model=None):
    """Transcribe int16 audio to a cleaned timer phrase.

    Returns:
        str: The phrase, or empty string if nothing was said.
    """
    if model is None:
        model = load_model()

    # faster-whisper expects float32 normalized to [-1, 1]
    audio_f32 = audio.astype(np.float32) / 32768.0

    segments, _ = model.transcribe(
        audio_f32,
        language="en",
        vad_filter=True,  # trims the silence in a fixed listen window
        initial_prompt=TIMER_PROMPT,
    )
    return clean_transcript(" ".join(s.text for s in segments))


if __name__ == "__main__":
    from voicetimer.audio.mic import record_request
    from voicetimer.phrase import parse_phrase

    print("Loading whisper model...")
    model = load_model()
    print("Say a timer request...")
    text = transcribe(record_request(), model)
    print(f"Heard: {text!r}")
    print(f"Parsed: {parse_phrase(text)}")
