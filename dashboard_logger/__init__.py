"""Lifecycle event logger for the Claude Code agent dashboard."""

from .classifier import DELEGATION_TOOL, TRACKED_TOOLS, Event, EventType, classify
from .hook import main, read_payload, run
from .reader import (
    HookEvent,
    HookEventType,
    ParseError,
    ParseResult,
    events_for_agent,
    events_for_session,
    parse_hook_events,
    parse_hook_file,
)
from .session import FileIdentityStore, MemoryIdentityStore, get_or_create_session_id, new_session_id
from .sink import EventSink
from .task_id import TASK_ID_MATCHERS, extract_task_id

__all__ = [
    "DELEGATION_TOOL",
    "TRACKED_TOOLS",
    "Event",
    "EventType",
    "classify",
    "main",
    "read_payload",
    "run",
    "HookEvent",
    "HookEventType",
    "ParseError",
    "ParseResult",
    "events_for_agent",
    "events_for_session",
    "parse_hook_events",
    "parse_hook_file",
    "FileIdentityStore",
    "MemoryIdentityStore",
    "get_or_create_session_id",
    "new_session_id",
    "EventSink",
    "TASK_ID_MATCHERS",
    "extract_task_id",
]
