"""Configuration loading.

Priority: Environment Variables > Config File > Defaults

Config file: ~/.claude/dashboard-logger.json

    {
      "events_file": "~/.claude/dashboard/events.jsonl",
      "session_id_file": "/tmp/claude-dashboard-session-id",
      "agent_role": "main",
      "tracked_tools": ["Edit", "Write", "Bash"],
      "debug": false
    }
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dazzle_filekit import normalize_cross_platform_path

from .classifier import DEFAULT_AGENT_ROLE, TRACKED_TOOLS
from .session import SESSION_ID_FILE
from .sink import EVENTS_FILE

CONFIG_FILE = Path.home() / ".claude" / "dashboard-logger.json"


@dataclass
class Config:
    """Logger configuration with all settings."""

    events_file: Path = EVENTS_FILE
    session_id_file: Path = SESSION_ID_FILE
    agent_role: str = DEFAULT_AGENT_ROLE
    tracked_tools: frozenset[str] = field(default_factory=lambda: TRACKED_TOOLS)
    debug: bool = False


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a JSON config file, returning empty dict on failure."""
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def parse_bool(value: Any, default: bool = False) -> bool:
    """Parse a value as boolean."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    if isinstance(value, int):
        return value != 0
    return default


def parse_path(value: Any) -> Optional[Path]:
    """Normalize a user-supplied path (tilde, env vars, WSL/MSYS forms)."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return normalize_cross_platform_path(value.strip())
    except Exception:
        return None


def parse_tools(value: Any) -> Optional[frozenset[str]]:
    """Parse a tool list from a JSON list or a comma-separated string."""
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return None
    tools = frozenset(t.strip() for t in value if isinstance(t, str) and t.strip())
    return tools or None


def load_configuration(config_path: Optional[Path] = None) -> Config:
    """Load configuration with proper precedence."""
    file_config = load_config_file(config_path or CONFIG_FILE)

    config = Config()

    # Apply file config
    events_file = parse_path(file_config.get("events_file"))
    if events_file:
        config.events_file = events_file

    session_id_file = parse_path(file_config.get("session_id_file"))
    if session_id_file:
        config.session_id_file = session_id_file

    agent_role = file_config.get("agent_role")
    if isinstance(agent_role, str) and agent_role.strip():
        config.agent_role = agent_role.strip()

    tracked_tools = parse_tools(file_config.get("tracked_tools"))
    if tracked_tools:
        config.tracked_tools = tracked_tools

    config.debug = parse_bool(file_config.get("debug", False))

    # Environment variable overrides (highest priority)
    env_events = parse_path(os.environ.get("CLAUDE_DASHBOARD_EVENTS_FILE"))
    if env_events:
        config.events_file = env_events

    env_session = parse_path(os.environ.get("CLAUDE_DASHBOARD_SESSION_FILE"))
    if env_session:
        config.session_id_file = env_session

    env_role = os.environ.get("CLAUDE_AGENT_ROLE")
    if env_role:
        config.agent_role = env_role

    env_tools = parse_tools(os.environ.get("CLAUDE_DASHBOARD_TRACKED_TOOLS"))
    if env_tools:
        config.tracked_tools = env_tools

    env_debug = os.environ.get("CLAUDE_DASHBOARD_DEBUG")
    if env_debug:
        config.debug = parse_bool(env_debug)

    return config
