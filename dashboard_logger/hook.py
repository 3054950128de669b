"""PreToolUse/PostToolUse hook entry point.

Reads the hook payload from stdin, classifies it and appends at most one
line to the dashboard events file. Hooks must never break the session:
every step falls back to a safe default, nothing is printed, and the
process always exits 0.
"""

from __future__ import annotations

import json
import sys
from typing import Any, BinaryIO, Optional

from .classifier import Event, classify
from .config import Config, load_configuration
from .debug import debug_log, enable_debug_log
from .session import FileIdentityStore, IdentityStore, get_or_create_session_id
from .sink import EventSink


def read_payload(stream: Optional[BinaryIO] = None) -> Optional[dict[str, Any]]:
    """Read and parse the JSON hook input.

    Returns {} for empty input and None if the input could not be read or
    is not a JSON object.
    """
    if stream is None:
        stream = sys.stdin.buffer

    try:
        # Claude sends UTF-8 regardless of the platform's stdin encoding
        raw_input = stream.read().decode("utf-8", errors="replace")
    except (OSError, ValueError) as e:
        debug_log(f"Failed to read stdin: {e}")
        return None

    if not raw_input.strip():
        return {}

    try:
        payload = json.loads(raw_input)
    except json.JSONDecodeError as e:
        debug_log(f"JSON parse error: {e}")
        return None

    if not isinstance(payload, dict):
        debug_log(f"Ignoring non-object payload of type {type(payload).__name__}")
        return None
    return payload


def run(
    stream: Optional[BinaryIO] = None,
    config: Optional[Config] = None,
    store: Optional[IdentityStore] = None,
    sink: Optional[EventSink] = None,
) -> Optional[Event]:
    """Run one hook invocation. Returns the event that was classified, if any."""
    if config is None:
        config = load_configuration()
    enable_debug_log(config.debug)

    payload = read_payload(stream)
    if payload is None:
        payload = {}
    debug_log(f"Hook event: {payload.get('hook_event_name', '')!r}, keys: {list(payload.keys())}")

    session_id = get_or_create_session_id(store or FileIdentityStore(config.session_id_file))

    event = classify(
        payload,
        session_id,
        agent_role=config.agent_role,
        tracked_tools=config.tracked_tools,
    )
    if event is None:
        debug_log("Untracked tool, no event written")
        return None

    sink = sink or EventSink(config.events_file)
    if sink.append(event):
        debug_log(f"Logged {event.event_type.value} for {event.tool_name} to {sink.path}")
    return event


def main() -> int:
    """Entry point for Claude Code hook."""
    try:
        run()
    except Exception as e:
        # Silent exit, hooks must never break the session
        debug_log(f"Unexpected error: {e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
