"""Durable record of the last requested timer, for restoring after a restart.

Stored as data/timer_tombstone.json beside the package:
    {"end_millis": 1700000000000, "loudly": true}
"""

import json
from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_PATH = _DATA_DIR / "timer_tombstone.json"


@dataclass(frozen=True)
class Tombstone:
    end_millis: int
    loudly: bool = True


def save(end_millis, loudly, path=DEFAULT_PATH):
    """Write the tombstone atomically (temp file, then rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {"end_millis": int(end_millis), "loudly": bool(loudly)}
    tmp = path.with_suffix(".tmp")
    tmp.write_text(json.dumps(data, indent=2) + "\n")
    tmp.replace(path)


def load(path=DEFAULT_PATH):
    """Read the tombstone. Returns a Tombstone, or None if missing or unreadable."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return None
    try:
        return Tombstone(int(data["end_millis"]), bool(data.get("loudly", True)))
    except (KeyError, TypeError, ValueError, AttributeError):
        return None


def clear(path=DEFAULT_PATH):
    Path(path).unlink(missing_ok=True)
