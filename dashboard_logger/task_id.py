"""Best-effort task id extraction from free-text prompts.

Matchers are tried in order and the first hit wins:

  P1-T1, P1-R1-T1   -> returned as written
  "task #42"        -> "task-42"

No validation happens here: the result is a syntactic hint for the
dashboard, never checked against a task list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class TaskIdMatcher:
    """A named pattern plus the formatter applied to its match."""

    name: str
    pattern: re.Pattern
    format: Callable[[re.Match], str]

    def match(self, text: str) -> Optional[str]:
        """Return the formatted task id if the pattern occurs in text."""
        found = self.pattern.search(text)
        if found:
            return self.format(found)
        return None


TASK_ID_MATCHERS: tuple[TaskIdMatcher, ...] = (
    # Phase/role/task ids, e.g. "P1-T1" or "P1-R1-T1"
    TaskIdMatcher(
        name="structured",
        pattern=re.compile(r"\b(P\d+-(?:R\d+-)?T\d+)\b", re.IGNORECASE),
        format=lambda m: m.group(1),
    ),
    # Loose references, e.g. "task #42" or "Task 7"
    TaskIdMatcher(
        name="task_number",
        pattern=re.compile(r"task\s*#?(\d+)", re.IGNORECASE),
        format=lambda m: f"task-{m.group(1)}",
    ),
)


def extract_task_id(text: Any) -> Optional[str]:
    """Extract a short task identifier from a Task prompt, or None."""
    if not text or not isinstance(text, str):
        return None
    for matcher in TASK_ID_MATCHERS:
        task_id = matcher.match(text)
        if task_id:
            return task_id
    return None
