"""Tests for install.py"""

import json

import pytest

import install
from dashboard_logger import config as config_module
from dashboard_logger.classifier import TRACKED_TOOLS
from dashboard_logger.config import Config
from install import (
    HOOK_SCRIPT,
    SettingsError,
    build_hook_entry,
    has_event_logger_entry,
    hook_matcher,
    load_settings,
    patch_settings,
)


@pytest.fixture(autouse=True)
def default_config(monkeypatch, tmp_path):
    """Keep the user's own config file and environment out of the installer."""
    monkeypatch.delenv("CLAUDE_DASHBOARD_TRACKED_TOOLS", raising=False)
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "no-config.json")


def read_settings(claude_dir):
    return json.loads((claude_dir / "settings.json").read_text(encoding="utf-8"))


def matchers(settings):
    return [settings["hooks"][key][0]["matcher"] for key in ("PreToolUse", "PostToolUse")]


class TestHookEntry:

    def test_shape(self):
        entry = build_hook_entry('python "/home/u/.claude/hooks/event-logger.py"')
        assert entry["matcher"] == hook_matcher()
        assert len(entry["hooks"]) == 1
        assert entry["hooks"][0]["type"] == "command"
        assert HOOK_SCRIPT in entry["hooks"][0]["command"]
        assert entry["hooks"][0]["timeout"] == 3

    def test_matcher_covers_task_and_tracked_tools(self):
        parts = hook_matcher().split("|")
        assert parts[0] == "Task"
        assert set(parts[1:]) == TRACKED_TOOLS

    def test_matcher_from_configured_tools(self):
        assert hook_matcher(frozenset({"MultiEdit", "Bash"})) == "Task|Bash|MultiEdit"

    def test_task_not_repeated(self):
        assert hook_matcher(["Task", "Edit"]) == "Task|Edit"

    def test_entry_uses_given_matcher(self):
        assert build_hook_entry("x event-logger.py", "Task|MultiEdit")["matcher"] == "Task|MultiEdit"

    def test_detects_existing_entry(self):
        assert has_event_logger_entry([build_hook_entry("node ~/.claude/hooks/event-logger.py")])

    def test_ignores_other_entries(self):
        entries = [
            {"matcher": "Bash", "hooks": [{"type": "command", "command": "other-hook.sh"}]},
            "junk",
            {"hooks": "not-a-list"},
        ]
        assert has_event_logger_entry(entries) is False


class TestPatchSettings:

    def test_adds_both_hook_events(self):
        settings = {}
        assert patch_settings(settings, "cmd event-logger.py") == {"PreToolUse": "add", "PostToolUse": "add"}
        assert len(settings["hooks"]["PreToolUse"]) == 1
        assert len(settings["hooks"]["PostToolUse"]) == 1

    def test_idempotent(self):
        settings = {}
        patch_settings(settings, "cmd event-logger.py")
        assert patch_settings(settings, "cmd event-logger.py") == {}
        assert len(settings["hooks"]["PreToolUse"]) == 1

    def test_preserves_existing_hooks_and_keys(self):
        other = {"matcher": "Bash", "hooks": [{"type": "command", "command": "guard.sh"}]}
        settings = {"model": "opus", "hooks": {"PreToolUse": [other]}}
        assert list(patch_settings(settings, "cmd event-logger.py")) == ["PreToolUse", "PostToolUse"]
        assert settings["model"] == "opus"
        assert settings["hooks"]["PreToolUse"][0] == other
        assert len(settings["hooks"]["PreToolUse"]) == 2

    def test_only_missing_event_is_patched(self):
        settings = {"hooks": {"PreToolUse": [build_hook_entry("x event-logger.py")]}}
        assert patch_settings(settings, "x event-logger.py") == {"PostToolUse": "add"}

    def test_stale_matcher_is_updated(self):
        settings = {}
        patch_settings(settings, "x event-logger.py")
        assert patch_settings(settings, "y event-logger.py", "Task|MultiEdit") == {
            "PreToolUse": "update", "PostToolUse": "update",
        }
        entry = settings["hooks"]["PreToolUse"][0]
        assert entry["matcher"] == "Task|MultiEdit"
        assert entry["hooks"][0]["command"] == "x event-logger.py"
        assert len(settings["hooks"]["PreToolUse"]) == 1

    def test_hooks_not_object(self):
        with pytest.raises(SettingsError):
            patch_settings({"hooks": []}, "cmd")

    def test_hook_list_not_array(self):
        with pytest.raises(SettingsError):
            patch_settings({"hooks": {"PreToolUse": {}}}, "cmd")


class TestLoadSettings:

    def test_missing_file(self, tmp_path):
        assert load_settings(tmp_path / "settings.json") == {}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(SettingsError):
            load_settings(path)

    def test_root_not_object(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(SettingsError):
            load_settings(path)


class TestInstall:

    def test_full_install(self, tmp_path):
        claude_dir = tmp_path / ".claude"
        assert install.install(claude_dir=claude_dir) is True

        assert (claude_dir / "dashboard").is_dir()
        hook_file = claude_dir / "hooks" / HOOK_SCRIPT
        assert hook_file.exists()
        assert "dashboard_logger.hook" in hook_file.read_text(encoding="utf-8")

        settings = read_settings(claude_dir)
        command = settings["hooks"]["PreToolUse"][0]["hooks"][0]["command"]
        assert str(hook_file) in command
        assert len(settings["hooks"]["PostToolUse"]) == 1
        assert matchers(settings) == [hook_matcher(TRACKED_TOOLS)] * 2

    def test_configured_tool_in_matcher(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CLAUDE_DASHBOARD_TRACKED_TOOLS", "MultiEdit,Bash")
        claude_dir = tmp_path / ".claude"
        install.install(claude_dir=claude_dir)

        assert matchers(read_settings(claude_dir)) == ["Task|Bash|MultiEdit"] * 2

    def test_configured_tool_from_config_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "dashboard-logger.json"
        config_file.write_text(json.dumps({"tracked_tools": ["Edit", "MultiEdit"]}), encoding="utf-8")
        monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
        claude_dir = tmp_path / ".claude"
        install.install(claude_dir=claude_dir)

        for matcher in matchers(read_settings(claude_dir)):
            assert "MultiEdit" in matcher.split("|")

    def test_reinstall_after_tools_change(self, tmp_path, capsys):
        claude_dir = tmp_path / ".claude"
        install.install(claude_dir=claude_dir)
        capsys.readouterr()

        install.install(claude_dir=claude_dir, config=Config(tracked_tools=frozenset({"MultiEdit"})))
        settings = read_settings(claude_dir)
        assert matchers(settings) == ["Task|MultiEdit"] * 2
        assert len(settings["hooks"]["PreToolUse"]) == 1
        assert "hooks.PreToolUse: updated event-logger entry" in capsys.readouterr().out

    def test_second_install_changes_nothing(self, tmp_path):
        claude_dir = tmp_path / ".claude"
        install.install(claude_dir=claude_dir)
        before = (claude_dir / "settings.json").read_text(encoding="utf-8")

        assert install.install(claude_dir=claude_dir) is True
        assert (claude_dir / "settings.json").read_text(encoding="utf-8") == before

    def test_existing_script_kept_without_force(self, tmp_path):
        claude_dir = tmp_path / ".claude"
        hook_file = claude_dir / "hooks" / HOOK_SCRIPT
        hook_file.parent.mkdir(parents=True)
        hook_file.write_text("# custom", encoding="utf-8")

        install.install(claude_dir=claude_dir)
        assert hook_file.read_text(encoding="utf-8") == "# custom"

        install.install(claude_dir=claude_dir, force=True)
        assert "dashboard_logger.hook" in hook_file.read_text(encoding="utf-8")

    def test_check_only_writes_nothing(self, tmp_path, capsys):
        claude_dir = tmp_path / ".claude"
        assert install.install(check_only=True, claude_dir=claude_dir) is True
        assert not claude_dir.exists()
        out = capsys.readouterr().out
        assert "hooks.PreToolUse: will add event-logger entry" in out

    def test_check_only_reports_stale_matcher(self, tmp_path, capsys):
        claude_dir = tmp_path / ".claude"
        install.install(claude_dir=claude_dir)
        before = (claude_dir / "settings.json").read_text(encoding="utf-8")
        capsys.readouterr()

        config = Config(tracked_tools=frozenset({"MultiEdit"}))
        assert install.install(check_only=True, claude_dir=claude_dir, config=config) is True
        assert "hooks.PostToolUse: will update event-logger entry" in capsys.readouterr().out
        assert (claude_dir / "settings.json").read_text(encoding="utf-8") == before

    def test_bad_settings_raise(self, tmp_path):
        claude_dir = tmp_path / ".claude"
        claude_dir.mkdir()
        (claude_dir / "settings.json").write_text('{"hooks": []}', encoding="utf-8")
        with pytest.raises(SettingsError):
            install.install(claude_dir=claude_dir)
