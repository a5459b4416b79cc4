"""Entry point for `python -m voicetimer`.

    python -m voicetimer -parse [-v] <words...>      print the parsed command
    python -m voicetimer -regenerate <end_ms> [quietly]
    python -m voicetimer -type                       typed requests on stdin
    python -m voicetimer -devices                    list microphones
    python -m voicetimer                             voice loop
"""

import sys


def _print_command(cmd, parser=None):
    """Print a command in tests/test_cases.txt format."""
    if parser is not None:
        acc = parser.accumulator
        print(f"hours: {acc.hours}")
        print(f"minutes: {acc.minutes}")
        print(f"seconds: {acc.seconds}")
    print(f"duration_millis: {cmd.duration_millis}")
    print(f"starts_running: {'true' if cmd.starts_running else 'false'}")
    print(f"starts_loudly: {'true' if cmd.starts_loudly else 'false'}")


def _parse_cmd(words):
    """Parse a single phrase and print the result."""
    from voicetimer.phrase import PhraseParser
    from voicetimer.tokens import tokenize

    report = None
    if words and words[0] == "-v":
        words = words[1:]

        def report(event, token):
            print(f"# {event.name}: {token}")

    text = " ".join(words)
    parser = PhraseParser(tokenize(text), report)
    cmd = parser.run()
    print(f"> {text}")
    _print_command(cmd, parser)


def _regenerate_cmd(args):
    from voicetimer.clock import now_millis
    from voicetimer.regenerate import regenerate

    try:
        end = int(args[0])
    except (IndexError, ValueError):
        print("usage: python -m voicetimer -regenerate <end_millis> [quietly]")
        sys.exit(2)
    loudly = not (len(args) > 1 and args[1] == "quietly")
    _print_command(regenerate(end, now_millis(), loudly))


if __name__ == "__main__" or not sys.argv[0]:
    if len(sys.argv) >= 2 and sys.argv[1] == "-parse":
        _parse_cmd(sys.argv[2:])
    elif len(sys.argv) >= 2 and sys.argv[1] == "-regenerate":
        _regenerate_cmd(sys.argv[2:])
    elif len(sys.argv) >= 2 and sys.argv[1] == "-type":
        from voicetimer.main import run_typed
        run_typed()
    elif len(sys.argv) >= 2 and sys.argv[1] == "-devices":
        from voicetimer.audio.mic import list_input_devices
        list_input_devices()
    else:
        from voicetimer.main import main
        main()
