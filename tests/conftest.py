"""pytest configuration - put the project root on sys.path."""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent

# install.py and version.py live at the root, outside the package
if str(project_root) in sys.path:
    sys.path.remove(str(project_root))
sys.path.insert(0, str(project_root))

from dashboard_logger.config import Config  # noqa: E402


@pytest.fixture
def config(tmp_path):
    """Config pointing every file at a temp directory."""
    return Config(
        events_file=tmp_path / "dashboard" / "events.jsonl",
        session_id_file=tmp_path / "session-id",
    )
