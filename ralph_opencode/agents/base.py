"""Base agent protocol for Ralph."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Protocol


class AgentInvocationError(RuntimeError):
    """Raised when the agent process could not be started at all."""


class Agent(Protocol):
    """Protocol for Ralph agent implementations.

    The agent owns the plan document and every change to the repository;
    the loop only ever sees the text it prints.
    """

    @property
    def name(self) -> str:
        """Human-readable agent name for display."""
        ...

    def invoke(self, task: str, stack: str, cwd: Path | None = None) -> Iterator[str]:
        """Run one agent turn, yielding output lines.

        Args:
            task: Free-text task description
            stack: Stack selector passed through to the agent
            cwd: Working directory for the agent process

        Yields:
            Combined stdout/stderr lines (without trailing newlines)

        Raises:
            AgentInvocationError: if the process cannot be started
        """
        ...

    @property
    def exit_code(self) -> int | None:
        """Exit status of the last invocation, if it finished."""
        ...
