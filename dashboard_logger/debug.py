"""Opt-in debug log for the dashboard event logger hook."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

# Persistent location under ~/.claude, next to the other hook logs
DEBUG_LOG = Path.home() / ".claude" / "logs" / "dashboard-logger-debug.log"

_enabled = False


def enable_debug_log(enabled: bool = True) -> None:
    """Turn debug logging on or off for the rest of this process."""
    global _enabled
    _enabled = enabled


def debug_log(message: str) -> None:
    """Append debug message to log file."""
    if not _enabled:
        return
    try:
        DEBUG_LOG.parent.mkdir(parents=True, exist_ok=True)
        with open(DEBUG_LOG, "a", encoding="utf-8") as f:
            f.write(f"{datetime.now()}: {message}\n")
    except Exception:
        pass
