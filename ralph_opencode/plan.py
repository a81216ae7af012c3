"""Plan document (markdown checklist) reading.

The loop itself never touches the plan; this is for the ``status`` and
``init`` commands only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ralph_opencode.config import BLOCKED_MARKER

TASK_RE = re.compile(
    r"^\s*[-*]\s+"
    r"(?P<pre>\[BLOCKED\]\s*)?"
    r"\[(?P<mark>[ xX])\]\s*"
    r"(?P<text>.*?)\s*$"
)


@dataclass
class PlanTask:
    """A single checklist line from the plan."""

    line_no: int
    text: str
    done: bool
    blocked: bool


@dataclass
class PlanDocument:
    """Checklist of tasks recorded in the plan file."""

    tasks: list[PlanTask]

    @classmethod
    def parse(cls, text: str) -> PlanDocument:
        """Parse checklist lines, ignoring everything else."""
        tasks: list[PlanTask] = []
        for line_no, line in enumerate(text.splitlines(), start=1):
            match = TASK_RE.match(line)
            if not match:
                continue
            body = match.group("text")
            blocked = match.group("pre") is not None
            if body.startswith(BLOCKED_MARKER):
                blocked = True
                body = body[len(BLOCKED_MARKER):].strip()
            tasks.append(
                PlanTask(
                    line_no=line_no,
                    text=body,
                    done=match.group("mark").lower() == "x",
                    blocked=blocked,
                )
            )
        return cls(tasks=tasks)

    @classmethod
    def load(cls, path: Path) -> PlanDocument:
        """Load and parse a plan file."""
        return cls.parse(path.read_text(encoding="utf-8"))

    @property
    def completed(self) -> list[PlanTask]:
        return [t for t in self.tasks if t.done]

    @property
    def pending(self) -> list[PlanTask]:
        return [t for t in self.tasks if not t.done]

    @property
    def blocked(self) -> list[PlanTask]:
        return [t for t in self.tasks if t.blocked and not t.done]

    def next_task(self) -> PlanTask | None:
        """First unchecked task that is not blocked."""
        for task in self.tasks:
            if not task.done and not task.blocked:
                return task
        return None
