"""Voice timer main loop.

Push to talk: press Enter, say a timer request, and the timer starts.
The last timer is restored from its tombstone on startup.

Usage:
    python -m voicetimer          # voice: mic -> whisper -> timer -> piper
    python -m voicetimer -type    # typed phrases on stdin, no audio
"""

import sys
import time

from voicetimer.service import TimerService


def log(msg):
    print(msg, flush=True)


def _make_service(announce):
    service = TimerService()
    service.set_announce_callback(announce)
    service.set_present_callback(lambda mode: log(f"  [card] {mode}"))
    command = service.restore()
    if command is not None:
        state = "expired" if command.expired else f"{command.duration_millis} ms left"
        log(f"Restored timer from tombstone ({state}).")
    return service


def run_typed():
    """Read phrases from stdin and print the responses."""
    service = _make_service(lambda text: log(f"  [announce] {text}"))
    log("Type a timer request (Ctrl-D to quit).\n")
    try:
        for line in sys.stdin:
            text = line.strip()
            if not text:
                continue
            log(f"  Response: \"{service.handle(text, source='[typed]')}\"")
    except KeyboardInterrupt:
        pass
    finally:
        service.shutdown()
        log("\nShutting down.")


def main():
    from voicetimer.audio.mic import play_alarm, record_request
    from voicetimer.stt.whisper import load_model as load_whisper, transcribe
    from voicetimer.tts.piper import load_voice, speak

    log("Loading whisper model...")
    t0 = time.time()
    whisper = load_whisper()
    log(f"  whisper ready ({time.time() - t0:.1f}s)")

    log("Loading TTS voice...")
    t1 = time.time()
    load_voice()
    log(f"  TTS ready ({time.time() - t1:.1f}s)")

    def announce(text):
        log(f"  [announce] {text}")
        loud = service.last_command is None or service.last_command.starts_loudly
        if loud:
            play_alarm()
        speak(text)

    service = _make_service(announce)
    log(f"All models loaded in {time.time() - t0:.1f}s")
    log("Press Enter, then say your timer request.\n")

    try:
        while True:
            input()
            log("  Listening...")
            audio = record_request()
            log("  Transcribing...")
            t0 = time.time()
            text = transcribe(audio, whisper)
            log(f"  [{time.time() - t0:.1f}s] \"{text}\"")
            if not text:
                log("  (no speech detected)")
                continue
            response = service.handle(text)
            log(f"  Response: \"{response}\"")
            speak(response)
    except (KeyboardInterrupt, EOFError):
        log("\nShutting down.")
    finally:
        service.shutdown()


if __name__ == "__main__":
    main()
