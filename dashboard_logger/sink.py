"""Append-only JSONL writer for the dashboard events file."""

from __future__ import annotations

from pathlib import Path

from .classifier import Event
from .debug import debug_log

EVENTS_DIR = Path.home() / ".claude" / "dashboard"
EVENTS_FILE = EVENTS_DIR / "events.jsonl"


class EventSink:
    """Appends one JSON line per event to a shared log file.

    Several hook processes may write at once. Each line goes out in a
    single write on a file opened in append mode, so the OS places it at
    end-of-file and lines from different processes do not mix.
    """

    def __init__(self, path: Path = EVENTS_FILE):
        self.path = path

    def append(self, event: Event) -> bool:
        """Append a single JSONL line. Returns False if the event was dropped."""
        try:
            line = event.to_json() + "\n"
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8", newline="\n") as f:
                f.write(line)
            return True
        except (OSError, TypeError, ValueError) as e:
            # Hooks must never break the session, the event is lost
            debug_log(f"Failed to append event to {self.path}: {e}")
            return False
