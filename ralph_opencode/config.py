"""Configuration handling for Ralph."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

COMPLETION_SENTINEL = "RALPH_COMPLETE"
BLOCKED_MARKER = "[BLOCKED]"

DEFAULT_MAX_ITERATIONS = 25
DEFAULT_STACK = "full"
DEFAULT_PLAN_FILE = "plan.md"
DEFAULT_LOG_DIR = ".ralph/logs"


def _parse_bool(value: str | None) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return False
    return bool(re.match(r"^(1|true|yes)$", value.lower()))


def _parse_int(value: str | None, default: int) -> int:
    """Parse an integer, falling back to default on empty or bad input."""
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_float(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value.strip())
    except ValueError:
        return default


def _resolve(root_dir: Path, value: str) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    return root_dir / path


@dataclass
class RunConfig:
    """Configuration for a single Ralph run."""

    task: str = ""
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    stack: str = DEFAULT_STACK
    completion_sentinel: str = COMPLETION_SENTINEL
    blocked_marker: str = BLOCKED_MARKER
    sleep_seconds: float = 2.0

    # Agent config
    agent_cmd: str | None = None
    model: str | None = None

    # Files
    plan_file: Path = field(default_factory=lambda: Path(DEFAULT_PLAN_FILE))
    stacks_file: Path | None = None
    log_dir: Path | None = field(default_factory=lambda: Path(DEFAULT_LOG_DIR))

    # UI config
    ui_mode: str = "auto"  # auto|rich|plain
    no_color: bool = False
    ascii_only: bool = False

    @classmethod
    def from_env(cls, root_dir: Path | None = None) -> RunConfig:
        """Load configuration from environment variables."""
        if root_dir is None:
            root_dir = Path.cwd()

        stacks_file = os.environ.get("RALPH_STACKS_FILE")
        log_dir = os.environ.get("RALPH_LOG_DIR", DEFAULT_LOG_DIR)

        return cls(
            task=os.environ.get("RALPH_TASK", ""),
            max_iterations=_parse_int(
                os.environ.get("MAX_ITERATIONS"), DEFAULT_MAX_ITERATIONS
            ),
            stack=os.environ.get("RALPH_STACK") or DEFAULT_STACK,
            sleep_seconds=_parse_float(os.environ.get("SLEEP_SECONDS"), 2.0),
            agent_cmd=os.environ.get("AGENT_CMD") or None,
            model=os.environ.get("MODEL") or None,
            plan_file=_resolve(root_dir, os.environ.get("PLAN_FILE") or DEFAULT_PLAN_FILE),
            stacks_file=_resolve(root_dir, stacks_file) if stacks_file else None,
            # An empty RALPH_LOG_DIR disables run logs.
            log_dir=_resolve(root_dir, log_dir) if log_dir else None,
            ui_mode=os.environ.get("RALPH_UI", "auto"),
            no_color="NO_COLOR" in os.environ,
            ascii_only=_parse_bool(os.environ.get("RALPH_ASCII")),
        )

    def validate(self) -> list[str]:
        """Validate configuration, returning list of errors."""
        errors: list[str] = []

        if not self.task.strip():
            errors.append("Task description is required")

        if self.sleep_seconds < 0:
            errors.append(f"SLEEP_SECONDS must be non-negative (got: {self.sleep_seconds})")

        if not self.completion_sentinel:
            errors.append("Completion sentinel must not be empty")

        return errors
