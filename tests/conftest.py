"""Pytest fixtures for ralph_opencode tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from ralph_opencode.agents.base import AgentInvocationError


class ScriptedAgent:
    """Agent that replays one scripted output per invocation."""

    def __init__(
        self,
        outputs: list[str | Exception],
        exit_codes: list[int] | None = None,
    ):
        self._outputs = outputs
        self._exit_codes = exit_codes or []
        self._exit_code: int | None = None
        self.calls: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "scripted"

    def invoke(self, task: str, stack: str, cwd: Path | None = None) -> Iterator[str]:
        index = len(self.calls)
        self.calls.append((task, stack))
        self._exit_code = None
        output = self._outputs[index] if index < len(self._outputs) else "working..."
        if isinstance(output, Exception):
            raise output
        yield from output.splitlines()
        self._exit_code = self._exit_codes[index] if index < len(self._exit_codes) else 0

    @property
    def exit_code(self) -> int | None:
        return self._exit_code


@pytest.fixture
def scripted_agent():
    """Factory for ScriptedAgent instances."""
    return ScriptedAgent


@pytest.fixture
def invocation_error() -> AgentInvocationError:
    return AgentInvocationError("opencode: not found")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear Ralph-related environment variables."""
    env_vars = [
        "RALPH_TASK",
        "MAX_ITERATIONS",
        "RALPH_STACK",
        "SLEEP_SECONDS",
        "AGENT_CMD",
        "MODEL",
        "PLAN_FILE",
        "RALPH_STACKS_FILE",
        "RALPH_LOG_DIR",
        "RALPH_UI",
        "RALPH_FORCE_RICH",
        "NO_COLOR",
        "RALPH_ASCII",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)
