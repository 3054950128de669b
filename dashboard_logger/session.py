"""Stable session id shared by every hook invocation of one Claude run.

Each hook runs in a fresh process, so the id lives in a small file under
the system temp directory. The first invocation creates it, later ones
read it back. Nothing here ever deletes the file; it goes away with the
temp directory.
"""

from __future__ import annotations

import random
import string
import tempfile
import time
from pathlib import Path
from typing import Optional, Protocol

from .debug import debug_log

SESSION_ID_FILE = Path(tempfile.gettempdir()) / "claude-dashboard-session-id"

_BASE36 = string.digits + string.ascii_lowercase


class IdentityStore(Protocol):
    """Read-one / write-one cell holding the session id."""

    def read(self) -> Optional[str]:
        ...

    def write(self, token: str) -> bool:
        ...


class FileIdentityStore:
    """Identity store backed by a single text file."""

    def __init__(self, path: Path = SESSION_ID_FILE):
        self.path = path

    def read(self) -> Optional[str]:
        """Return the stored id, or None if missing, empty or unreadable."""
        try:
            if self.path.exists():
                content = self.path.read_text(encoding="utf-8").strip()
                if content:
                    return content
        except (OSError, UnicodeDecodeError) as e:
            debug_log(f"Failed to read session id from {self.path}: {e}")
        return None

    def write(self, token: str) -> bool:
        """Persist the id. Returns False if the file could not be written."""
        try:
            self.path.write_text(token, encoding="utf-8")
            return True
        except OSError as e:
            debug_log(f"Failed to persist session id to {self.path}: {e}")
            return False


class MemoryIdentityStore:
    """In-process identity store, for tests and embedding."""

    def __init__(self, token: Optional[str] = None, writable: bool = True):
        self.token = token
        self.writable = writable
        self.writes = 0

    def read(self) -> Optional[str]:
        if self.token and self.token.strip():
            return self.token.strip()
        return None

    def write(self, token: str) -> bool:
        if not self.writable:
            return False
        self.token = token
        self.writes += 1
        return True


def to_base36(value: int) -> str:
    """Format a non-negative integer in lowercase base 36."""
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def new_session_id() -> str:
    """Build a fresh id: sess-<epoch ms in base36>-<6 random base36 chars>.

    Not cryptographically secure; the random part only has to keep two
    processes started in the same millisecond apart.
    """
    millis = int(time.time() * 1000)
    suffix = "".join(random.choice(_BASE36) for _ in range(6))
    return f"sess-{to_base36(millis)}-{suffix}"


def get_or_create_session_id(store: Optional[IdentityStore] = None) -> str:
    """Get or create a stable session ID for the current process tree.

    Returns the stored id if there is one. Otherwise a new id is generated,
    persisted if possible, and returned even when persisting failed.
    """
    if store is None:
        store = FileIdentityStore()

    existing = store.read()
    if existing:
        return existing

    session_id = new_session_id()
    if store.write(session_id):
        debug_log(f"Created session id {session_id}")
    else:
        debug_log(f"Using unpersisted session id {session_id}")
    return session_id
