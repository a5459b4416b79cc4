"""Microphone capture and speaker playback for the voice timer.

Records one spoken request at 16 kHz mono from the preferred input device,
and plays int16 audio (speech or the generated alarm) on the default output.

Usage (standalone test):
    python -m voicetimer.audio.mic
"""

import numpy as np
import sounddevice as sd

SAMPLE_RATE = 16000
CHANNELS = 1
DTYPE = "int16"

# How long to listen after the user asks for a timer
LISTEN_SECONDS = 6

# Preferred input devices, in priority order (substring match on device name)
PREFERRED_DEVICES = [
    "eMeet Luna",
    "External Microphone",
    "MacBook Pro Microphone",
]

# Alarm: short beeps, repeated
ALARM_FREQ = 880      # Hz
ALARM_BEEP_MS = 180
ALARM_GAP_MS = 120
ALARM_BEEPS = 4


def _input_devices():
    """(index, name) for every device that can record."""
    return [(i, d["name"]) for i, d in enumerate(sd.query_devices())
            if d["max_input_channels"] > 0]


def list_input_devices():
    """Print the microphones a timer request could be recorded from."""
    preferred = find_preferred_device()
    print("Input devices (* = used for timer requests):")
    for i, name in _input_devices():
        print(f"  {'*' if i == preferred else ' '} [{i}] {name}")


def find_preferred_device():
    """Index of the first PREFERRED_DEVICES match, or None for the system default."""
    inputs = _input_devices()
    for wanted in PREFERRED_DEVICES:
        match = next((i for i, name in inputs if wanted in name), None)
        if match is not None:
            return match
    return None


def record_request(seconds=LISTEN_SECONDS, device=None):
    """Record a fixed window of speech. Blocks until done.

    Returns:
        numpy int16 array (16 kHz mono).
    """
    if device is None:
        device = find_preferred_device()
    frames = int(seconds * SAMPLE_RATE)
    audio = sd.rec(frames, samplerate=SAMPLE_RATE, channels=CHANNELS,
                   dtype=DTYPE, device=device)
    sd.wait()
    return audio[:, 0].copy()


_output_rate = None


def _get_output_rate():
    """Get the default output device's sample rate (cached)."""
    global _output_rate
    if _output_rate is None:
        dev = sd.query_devices(kind="output")
        _output_rate = int(dev["default_samplerate"])
    return _output_rate


def play_audio(audio, sample_rate):
    """Play an int16 array and block until done, resampling to the device rate."""
    target_rate = _get_output_rate()
    if sample_rate != target_rate and len(audio):
        n_out = int(len(audio) * target_rate / sample_rate)
        x_old = np.linspace(0, 1, len(audio))
        x_new = np.linspace(0, 1, n_out)
        audio = np.interp(x_new, x_old, audio.astype(np.float64)).astype(np.int16)
        sample_rate = target_rate
    sd.play(audio, samplerate=sample_rate)
    sd.wait()


def alarm_tone(sample_rate=SAMPLE_RATE, beeps=ALARM_BEEPS):
    """Build the alarm as an int16 array: sine beeps separated by silence."""
    t = np.arange(int(sample_rate * ALARM_BEEP_MS / 1000)) / sample_rate
    beep = 0.6 * np.sin(2 * np.pi * ALARM_FREQ * t)
    # 5 ms fade in/out to avoid clicks
    fade = min(len(beep) // 2, int(sample_rate * 0.005))
    if fade:
        ramp = np.linspace(0, 1, fade)
        beep[:fade] *= ramp
        beep[-fade:] *= ramp[::-1]
    gap = np.zeros(int(sample_rate * ALARM_GAP_MS / 1000))
    tone = np.concatenate([np.concatenate([beep, gap]) for _ in range(beeps)])
    return (tone * 32767).astype(np.int16)


def play_alarm(beeps=ALARM_BEEPS):
    play_audio(alarm_tone(beeps=beeps), SAMPLE_RATE)


if __name__ == "__main__":
    list_input_devices()

    dev = find_preferred_device()
    if dev is not None:
        print(f"\nSelected: [{dev}] {sd.query_devices(dev)['name']}")
    else:
        print("\nUsing system default input device")

    print(f"Say a timer request ({LISTEN_SECONDS}s)...")
    audio = record_request(device=dev)
    peak = np.max(np.abs(audio))
    print(f"Captured {len(audio) / SAMPLE_RATE:.2f}s, peak amplitude {peak}")
    if peak < 100:
        print("Very low signal; check that the mic is enabled and not muted.")

    print("Playing alarm...")
    play_alarm()
