"""Run log files and JSON summaries."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ralph_opencode.config import RunConfig
    from ralph_opencode.loop import LoopResult

_SUMMARY_SUFFIX = ".summary.json"
_LABEL_RE = re.compile(r"[^a-zA-Z0-9_.-]+")


@dataclass(frozen=True)
class RunLogPaths:
    """Where a single run writes its output and summary."""

    log_path: Path
    summary_path: Path


def _timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime("%Y%m%d-%H%M%S-%f")


def _sanitize_label(label: str) -> str:
    sanitized = _LABEL_RE.sub("_", label.strip())
    return sanitized or "run"


def run_log_paths(log_dir: Path, label: str = "run", now: datetime | None = None) -> RunLogPaths:
    """Build timestamped log and summary paths inside log_dir.

    A numeric suffix is added when a log with the same stem already exists.
    """
    base = f"{_timestamp(now)}_{_sanitize_label(label)}"
    stem = base
    counter = 1
    while (log_dir / f"{stem}.log").exists() or (log_dir / f"{stem}{_SUMMARY_SUFFIX}").exists():
        stem = f"{base}-{counter}"
        counter += 1
    return RunLogPaths(
        log_path=log_dir / f"{stem}.log",
        summary_path=log_dir / f"{stem}{_SUMMARY_SUFFIX}",
    )


def build_summary(config: RunConfig, result: LoopResult, log_path: Path | None) -> dict[str, Any]:
    """Build the JSON summary payload for a finished run."""
    return {
        "task": config.task,
        "stack": config.stack,
        "max_iterations": config.max_iterations,
        "outcome": result.outcome.value,
        "iterations": result.iterations,
        "blocked_iterations": list(result.blocked_iterations),
        "failed_iterations": list(result.failed_iterations),
        "exit_code": result.exit_code,
        "log_path": str(log_path) if log_path is not None else None,
    }


def write_summary(path: Path, payload: dict[str, Any]) -> Path:
    """Write a run summary as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)
        handle.write("\n")
    return path
