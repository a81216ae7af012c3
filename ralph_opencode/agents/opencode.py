"""opencode CLI agent for Ralph."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Iterator

from ralph_opencode.agents.base import AgentInvocationError


class OpenCodeAgent:
    """Agent that runs the ``ralph`` command through the opencode CLI."""

    def __init__(self, model: str | None = None, binary: str = "opencode"):
        """Initialize opencode agent.

        Args:
            model: Model name to pass to opencode --model
            binary: opencode executable name or path
        """
        self._model = model
        self._binary = binary
        self._exit_code: int | None = None

    @property
    def name(self) -> str:
        """Human-readable agent name."""
        if self._model:
            return f"opencode ({self._model})"
        return "opencode"

    @classmethod
    def is_available(cls, binary: str = "opencode") -> bool:
        """Check if opencode CLI is available."""
        return shutil.which(binary) is not None

    def build_command(self, task: str, stack: str) -> list[str]:
        cmd = [self._binary, "run", "ralph", "--task", task, "--stack", stack]
        if self._model:
            cmd.extend(["--model", self._model])
        return cmd

    def invoke(self, task: str, stack: str, cwd: Path | None = None) -> Iterator[str]:
        """Run opencode once, yielding output lines as they arrive."""
        self._exit_code = None
        cmd = self.build_command(task, stack)

        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=cwd,
            )
        except OSError as exc:
            raise AgentInvocationError(f"Failed to start {self._binary}: {exc}") from exc

        try:
            if proc.stdout:
                for line in proc.stdout:
                    yield line.rstrip("\n")
        finally:
            if proc.stdout:
                proc.stdout.close()
            self._exit_code = proc.wait()

    @property
    def exit_code(self) -> int | None:
        """Exit status of the last opencode run."""
        return self._exit_code
