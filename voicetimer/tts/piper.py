"""Text-to-speech using Piper, for spoken confirmations and expiry announcements.

Usage (standalone test):
    python -m voicetimer.tts.piper
"""

import os

import numpy as np
from piper import PiperVoice, SynthesisConfig

from voicetimer.audio.mic import play_audio

MODELS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__)))), "models", "piper")
DEFAULT_VOICE = "en_US-amy-medium"
DEFAULT_LENGTH_SCALE = 0.75  # < 1.0 = faster speech

_voice = None


def load_voice(voice_name=DEFAULT_VOICE):
    """Load a Piper voice from MODELS_DIR. Caches on first call."""
    global _voice
    if _voice is None:
        model_path = os.path.join(MODELS_DIR, f"{voice_name}.onnx")
        _voice = PiperVoice.load(model_path, f"{model_path}.json")
    return _voice


def speak(text, voice=None):
    """Synthesize text and play it. Blocks until done."""
    text = text.strip()
    if not text:
        return
    if voice is None:
        voice = load_voice()
    cfg = SynthesisConfig(length_scale=DEFAULT_LENGTH_SCALE)
    chunks = list(voice.synthesize(text, syn_config=cfg))
    if not chunks:
        return
    audio = np.concatenate([c.audio_int16_array for c in chunks])
    play_audio(audio, chunks[0].sample_rate)


if __name__ == "__main__":
    for phrase in ["Timer set for 2 minutes and 30 seconds.", "Your timer is done!"]:
        print(f'Saying: "{phrase}"')
        speak(phrase)
