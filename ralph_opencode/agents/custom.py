"""Custom command agent for Ralph."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Iterator

from ralph_opencode.agents.base import AgentInvocationError


class CustomAgent:
    """Agent that runs a custom shell command."""

    def __init__(self, command: str):
        """Initialize with command string.

        Args:
            command: Shell command to run. The task is piped to stdin and
                exported as RALPH_TASK / RALPH_STACK.
        """
        self._command = command
        self._exit_code: int | None = None

    @property
    def name(self) -> str:
        """Human-readable agent name."""
        return f"custom ({self._command})"

    def invoke(self, task: str, stack: str, cwd: Path | None = None) -> Iterator[str]:
        """Run command with the task piped to stdin.

        Yields output lines as they arrive.
        """
        self._exit_code = None
        env = dict(os.environ)
        env["RALPH_TASK"] = task
        env["RALPH_STACK"] = stack

        try:
            proc = subprocess.Popen(
                self._command,
                shell=True,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=cwd,
                env=env,
            )
        except OSError as exc:
            raise AgentInvocationError(f"Failed to start agent command: {exc}") from exc

        # Write task to stdin
        if proc.stdin:
            try:
                proc.stdin.write(task)
                proc.stdin.close()
            except BrokenPipeError:
                pass

        # Stream output
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
        """Exit status of the last command run."""
        return self._exit_code
