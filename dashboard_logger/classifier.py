"""Map a Claude Code hook payload onto dashboard lifecycle events.

Hook events captured:
  PreToolUse[Task]              -> agent_start
  PostToolUse[Task]             -> agent_end
  PreToolUse[Edit|Write|...]    -> tool_start
  PostToolUse[Edit|Write|...]   -> tool_end

Anything else is dropped.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Optional

from .task_id import extract_task_id

# Task is the sub-agent delegation tool, tracked as agent events
DELEGATION_TOOL = "Task"

PRE_HOOK_PREFIX = "PreToolUse"

UNKNOWN = "unknown"

DEFAULT_AGENT_ROLE = "main"

# Tools we track as tool events (Task is handled separately)
TRACKED_TOOLS: frozenset[str] = frozenset([
    "Edit", "Write", "Read", "Bash", "Grep", "Glob",
    "NotebookEdit", "WebFetch", "WebSearch",
])


class EventType(str, Enum):
    AGENT_START = "agent_start"
    AGENT_END = "agent_end"
    TOOL_START = "tool_start"
    TOOL_END = "tool_end"


@dataclass(frozen=True)
class Event:
    """One line of the dashboard events log."""

    event_type: EventType
    timestamp: str
    agent_id: str
    task_id: str
    session_id: str
    tool_name: str

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        data["event_type"] = self.event_type.value
        return data

    def to_json(self) -> str:
        """Serialize to a single line of compact JSON.

        Non-ASCII text is written as \\u escapes, so a lone surrogate taken
        from the payload still encodes.
        """
        return json.dumps(self.to_dict(), separators=(",", ":"))


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    ts = now or datetime.now(timezone.utc)
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_pre_hook(hook_event_name: str) -> bool:
    """Determine if this is a Pre or Post hook from the hook_event_name field."""
    return bool(hook_event_name) and hook_event_name.startswith(PRE_HOOK_PREFIX)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def resolve_tool_name(raw_event: dict[str, Any]) -> str:
    """tool_input.tool_name, falling back to the top-level tool_name."""
    tool_input = raw_event.get("tool_input")
    if not isinstance(tool_input, dict):
        tool_input = {}
    return _text(tool_input.get("tool_name")) or _text(raw_event.get("tool_name"))


def classify(
    raw_event: dict[str, Any],
    session_id: str,
    agent_role: str = DEFAULT_AGENT_ROLE,
    tracked_tools: Iterable[str] = TRACKED_TOOLS,
    timestamp: Optional[str] = None,
) -> Optional[Event]:
    """Classify a hook payload. Returns None when the event is not tracked.

    Missing or malformed fields fall back to sentinel values; this never
    raises for any dict input.
    """
    hook_event_name = _text(raw_event.get("hook_event_name"))
    tool_input = raw_event.get("tool_input")
    if not isinstance(tool_input, dict):
        tool_input = {}
    tool_name = resolve_tool_name(raw_event)

    pre = is_pre_hook(hook_event_name)
    timestamp = timestamp or utc_timestamp()

    if tool_name == DELEGATION_TOOL or DELEGATION_TOOL in hook_event_name:
        subagent_type = _text(tool_input.get("subagent_type")) or UNKNOWN
        task_id = extract_task_id(tool_input.get("prompt")) or UNKNOWN
        return Event(
            event_type=EventType.AGENT_START if pre else EventType.AGENT_END,
            timestamp=timestamp,
            agent_id=subagent_type,
            task_id=task_id,
            session_id=session_id,
            tool_name=subagent_type,
        )

    if tool_name in frozenset(tracked_tools):
        return Event(
            event_type=EventType.TOOL_START if pre else EventType.TOOL_END,
            timestamp=timestamp,
            agent_id=agent_role or DEFAULT_AGENT_ROLE,
            task_id=UNKNOWN,
            session_id=session_id,
            tool_name=tool_name,
        )

    return None
