#!/usr/bin/env python3
"""
Install the dashboard event logger hook to ~/.claude/

Steps:
  1. Create ~/.claude/dashboard/ and ~/.claude/hooks/
  2. Deploy hooks/scripts/event-logger.py to ~/.claude/hooks/
  3. Register the hook under PreToolUse and PostToolUse in ~/.claude/settings.json,
     matching Task plus the configured tracked tools

Usage:
    python install.py           # Install to ~/.claude/
    python install.py --check   # Check what would be installed
    python install.py --force   # Overwrite an existing hook script
"""

import argparse
import copy
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from dazzle_filekit import atomic_write_json, copy_file

from dashboard_logger.classifier import DELEGATION_TOOL, TRACKED_TOOLS
from dashboard_logger.config import Config, load_configuration
from version import VERSION

HOOK_SCRIPT = "event-logger.py"
HOOK_SOURCE = Path("hooks") / "scripts" / HOOK_SCRIPT

# Hook timeout in seconds
HOOK_TIMEOUT = 3

HOOK_EVENTS = ("PreToolUse", "PostToolUse")

PATCH_DONE = {"add": "added", "update": "updated"}


class SettingsError(Exception):
    """settings.json exists but does not have the expected shape."""


def get_claude_dir() -> Path:
    """Get the ~/.claude directory path."""
    return Path.home() / ".claude"


def hook_matcher(tracked_tools: Iterable[str] = TRACKED_TOOLS) -> str:
    """Matcher covering the delegation tool and every tracked tool.

    Claude Code only runs the hook for tools the matcher names, so this
    must list every tool the logger is configured to track.
    """
    tools = sorted(set(tracked_tools) - {DELEGATION_TOOL})
    return "|".join([DELEGATION_TOOL] + tools)


def hook_command(hook_file: Path) -> str:
    """Command line Claude Code runs for each tool use."""
    return f'"{sys.executable}" "{hook_file}"'


def build_hook_entry(command: str, matcher: Optional[str] = None) -> Dict[str, Any]:
    """Build the hook entry for settings.json."""
    return {
        "matcher": matcher or hook_matcher(),
        "hooks": [{
            "type": "command",
            "command": command,
            "timeout": HOOK_TIMEOUT,
        }],
    }


def find_event_logger_entry(entries: List[Any]) -> Optional[Dict[str, Any]]:
    """Return the first entry in a hook array that runs the event logger."""
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        hooks = entry.get("hooks")
        if not isinstance(hooks, list):
            continue
        for hook in hooks:
            command = hook.get("command") if isinstance(hook, dict) else None
            if isinstance(command, str) and HOOK_SCRIPT in command:
                return entry
    return None


def has_event_logger_entry(entries: List[Any]) -> bool:
    """Check if a hook array already contains an event-logger entry."""
    return find_event_logger_entry(entries) is not None


def load_settings(settings_file: Path) -> Dict[str, Any]:
    """Read settings.json, or start from an empty object if it is missing."""
    if not settings_file.exists():
        return {}
    try:
        settings = json.loads(settings_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SettingsError(f"Failed to parse {settings_file}: {e}")
    if not isinstance(settings, dict):
        raise SettingsError(f"{settings_file}: root is not an object")
    return settings


def patch_settings(settings: Dict[str, Any], command: str,
                   matcher: Optional[str] = None) -> Dict[str, str]:
    """Register the event-logger entry under each hook event.

    A missing entry is added. An existing entry keeps its command, but its
    matcher is rewritten when the tracked tools have changed.

    Returns {hook event name: "add" | "update"} for each event that changed
    (empty if nothing changed).
    """
    matcher = matcher or hook_matcher()
    hooks = settings.setdefault("hooks", {})
    if not isinstance(hooks, dict):
        raise SettingsError("settings.json 'hooks' is not an object")

    patched = {}
    for key in HOOK_EVENTS:
        entries = hooks.setdefault(key, [])
        if not isinstance(entries, list):
            raise SettingsError(f"settings.json 'hooks.{key}' is not an array")
        entry = find_event_logger_entry(entries)
        if entry is None:
            entries.append(build_hook_entry(command, matcher))
            patched[key] = "add"
        elif entry.get("matcher") != matcher:
            entry["matcher"] = matcher
            patched[key] = "update"
    return patched


def install(check_only: bool = False, force: bool = False,
            claude_dir: Optional[Path] = None,
            config: Optional[Config] = None) -> bool:
    """Install the hook script and register it in settings.json."""

    script_dir = Path(__file__).parent
    claude_dir = claude_dir or get_claude_dir()
    config = config or load_configuration()
    dashboard_dir = claude_dir / "dashboard"
    hooks_dir = claude_dir / "hooks"
    hook_src = script_dir / HOOK_SOURCE
    hook_dst = hooks_dir / HOOK_SCRIPT
    settings_file = claude_dir / "settings.json"
    matcher = hook_matcher(config.tracked_tools)

    print(f"claude-dashboard-event-logger {VERSION}")
    print(f"Claude directory: {claude_dir}")
    print(f"Hook matcher: {matcher}")
    print()

    if not hook_src.exists():
        print(f"  ERROR: Source file not found: {hook_src}")
        return False

    settings = load_settings(settings_file)
    pending = patch_settings(copy.deepcopy(settings), hook_command(hook_dst), matcher)

    if check_only:
        exists = hook_dst.exists()
        status = " (exists, will skip)" if exists and not force else ""
        status = " (exists, will overwrite)" if exists and force else status
        print("Files to install:")
        print(f"  {HOOK_SOURCE} -> hooks/{HOOK_SCRIPT}{status}")
        print("Settings to patch:")
        for key in HOOK_EVENTS:
            state = f"will {pending[key]} event-logger entry" if key in pending else "already registered"
            print(f"  hooks.{key}: {state}")
        print()
        print("Run without --check to install.")
        return True

    # Step 1: Create directories
    print("[1/3] Creating directories...")
    for directory in (dashboard_dir, hooks_dir):
        if directory.is_dir():
            print(f"  Already exists: {directory}")
        else:
            directory.mkdir(parents=True, exist_ok=True)
            print(f"  Created: {directory}")

    # Step 2: Deploy hook script
    print("[2/3] Deploying event-logger.py...")
    if hook_dst.exists() and not force:
        print(f"  SKIP: hooks/{HOOK_SCRIPT} (exists, use --force to overwrite)")
    elif copy_file(hook_src, hook_dst, preserve_attrs=True, overwrite=True):
        hook_dst.chmod(0o755)
        print(f"  OK: hooks/{HOOK_SCRIPT}")
    else:
        print(f"  ERROR: Failed to copy {hook_src} -> {hook_dst}")
        return False

    # Step 3: Patch settings.json
    print("[3/3] Patching settings.json...")
    patched = patch_settings(settings, hook_command(hook_dst), matcher)
    for key in HOOK_EVENTS:
        state = f"{PATCH_DONE[patched[key]]} event-logger entry" if key in patched else "event-logger already registered"
        print(f"  hooks.{key}: {state}")
    if patched:
        atomic_write_json(settings_file, settings, indent=2)
        print(f"  Saved: {settings_file}")
    else:
        print("  No changes needed")

    print()
    print("Next steps:")
    print("  1. Restart Claude Code")
    print("  2. Watch ~/.claude/dashboard/events.jsonl (or run dashboard-events)")

    return True


def main():
    parser = argparse.ArgumentParser(description="Install the dashboard event logger hook")
    parser.add_argument("--check", action="store_true", help="Check what would be installed")
    parser.add_argument("--force", action="store_true", help="Overwrite existing hook script")
    args = parser.parse_args()

    try:
        success = install(check_only=args.check, force=args.force)
        sys.exit(0 if success else 1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
