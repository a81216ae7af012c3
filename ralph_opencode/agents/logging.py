"""Agent wrapper that tees streamed output to a run log."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from ralph_opencode.agents.base import Agent


class LoggingAgent:
    """Agent wrapper that appends streamed output to a log file."""

    def __init__(self, agent: Agent, log_path: Path) -> None:
        self._agent = agent
        self._log_path = log_path
        self._invocations = 0

    @property
    def name(self) -> str:
        return self._agent.name

    @property
    def log_path(self) -> Path:
        return self._log_path

    def invoke(self, task: str, stack: str, cwd: Path | None = None) -> Iterator[str]:
        self._invocations += 1
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        with self._log_path.open("a", encoding="utf-8") as handle:
            handle.write(f"=== iteration {self._invocations} ===\n")
            for line in self._agent.invoke(task, stack, cwd):
                handle.write(f"{line}\n")
                handle.flush()
                yield line
            handle.write(f"=== exit code: {self._agent.exit_code} ===\n")

    @property
    def exit_code(self) -> int | None:
        return self._agent.exit_code
