#!/usr/bin/env python3
"""PreToolUse/PostToolUse Hook: Event Logger for Dashboard

Appends JSONL lines to ~/.claude/dashboard/events.jsonl on every tool use.
The agent dashboard watches this file for live agent activity.

Requires the dashboard_logger package to be importable by the Python
running this hook (pip install claude-dashboard-event-logger).
"""

import sys

try:
    from dashboard_logger.hook import main
except ImportError:
    # Package missing: exit quietly rather than break the session
    sys.exit(0)

if __name__ == "__main__":
    sys.exit(main())
