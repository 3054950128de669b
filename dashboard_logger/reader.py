"""Read the dashboard events log back.

Parses JSON Lines written by the hook. Malformed lines are collected as
errors instead of aborting the whole file, since a line may be cut short
if a hook process was killed mid-write.

Besides the four lifecycle events the hook writes, the log may hold
`error` records from other producers. Those carry an `error_message` and
may have no `tool_name`.

Usage:
    dashboard-events                       # all events in the default log
    dashboard-events path/to/events.jsonl --session sess-abc
    dashboard-events --agent backend-specialist
"""

from __future__ import annotations

import argparse
import json
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional

from .classifier import utc_timestamp
from .config import load_configuration, parse_path

# Python < 3.11 only parses 3 or 6 fractional digits
_FRACTION = re.compile(r"\.(\d+)")


class HookEventType(str, Enum):
    AGENT_START = "agent_start"
    AGENT_END = "agent_end"
    TOOL_START = "tool_start"
    TOOL_END = "tool_end"
    ERROR = "error"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp with a UTC offset (or `Z`) into UTC.

    Raises ValueError if the text is not a timestamp or has no offset.
    """
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"invalid timestamp {value!r}") from None
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp {value!r} has no UTC offset")
    return parsed.astimezone(timezone.utc)


def _optional_text(data: dict[str, Any], name: str) -> Optional[str]:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field '{name}' must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class HookEvent:
    """One record read from the events log."""

    event_type: HookEventType
    timestamp: datetime
    agent_id: str
    task_id: str
    session_id: str
    tool_name: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HookEvent:
        """Build a HookEvent from a decoded log line.

        Raises KeyError for a missing required field and ValueError for an
        unknown event type, a bad timestamp or a field of the wrong type.
        """
        fields: dict[str, Any] = {}
        for name in ("event_type", "timestamp", "agent_id", "task_id", "session_id"):
            value = data[name]
            if not isinstance(value, str):
                raise ValueError(f"field '{name}' must be a string, got {type(value).__name__}")
            fields[name] = value
        fields["event_type"] = HookEventType(fields["event_type"])
        fields["timestamp"] = parse_timestamp(fields["timestamp"])
        fields["tool_name"] = _optional_text(data, "tool_name")
        fields["error_message"] = _optional_text(data, "error_message")
        return cls(**fields)


@dataclass
class ParseError:
    """A single line that could not be parsed."""

    line_number: int
    line_content: str
    error: str


@dataclass
class ParseResult:
    """Result of parsing a JSONL file: events + any parse errors."""

    events: list[HookEvent] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)


def parse_hook_events(text: str) -> ParseResult:
    """Parse a JSONL string into events, collecting errors for malformed lines."""
    result = ParseResult()

    for idx, line in enumerate(text.splitlines()):
        trimmed = line.strip()
        if not trimmed:
            continue

        try:
            data = json.loads(trimmed)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            result.events.append(HookEvent.from_dict(data))
        except KeyError as e:
            result.errors.append(ParseError(idx + 1, trimmed, f"missing field {e}"))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            result.errors.append(ParseError(idx + 1, trimmed, str(e)))

    return result


def parse_hook_file(path: Path) -> ParseResult:
    """Parse a JSONL file from disk. Raises OSError if it cannot be read."""
    text = path.read_text(encoding="utf-8", errors="replace")
    return parse_hook_events(text)


def events_for_agent(events: Iterable[HookEvent], agent_id: str) -> list[HookEvent]:
    """Filter events by agent ID."""
    return [e for e in events if e.agent_id == agent_id]


def events_for_session(events: Iterable[HookEvent], session_id: str) -> list[HookEvent]:
    """Filter events by session ID."""
    return [e for e in events if e.session_id == session_id]


def format_event(event: HookEvent) -> str:
    columns = [
        utc_timestamp(event.timestamp),
        event.event_type.value,
        event.agent_id,
        event.task_id,
        event.session_id,
        event.tool_name or "",
    ]
    if event.error_message is not None:
        columns.append(event.error_message)
    return "\t".join(columns)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Show events from the dashboard events log")
    parser.add_argument("file", nargs="?", help="Events file (default: configured events file)")
    parser.add_argument("--session", help="Only show events for this session id")
    parser.add_argument("--agent", help="Only show events for this agent id")
    args = parser.parse_args(argv)

    path = parse_path(args.file) if args.file else load_configuration().events_file
    if path is None:
        print(f"Error: invalid path: {args.file!r}", file=sys.stderr)
        return 1

    try:
        result = parse_hook_file(path)
    except OSError as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return 1

    events = result.events
    if args.session:
        events = events_for_session(events, args.session)
    if args.agent:
        events = events_for_agent(events, args.agent)

    for event in events:
        print(format_event(event))

    if result.errors:
        print(f"{len(result.errors)} malformed line(s) skipped:", file=sys.stderr)
        for error in result.errors:
            print(f"  line {error.line_number}: {error.error}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
