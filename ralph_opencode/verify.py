"""Run a stack's verification commands."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from ralph_opencode.stacks import Stack, VerifyStep
    from ralph_opencode.ui.base import UI

# Shell conventions for "not executable" and "command not found".
PERMISSION_DENIED = 126
COMMAND_NOT_FOUND = 127

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


@dataclass
class VerifyResult:
    """Outcome of running a stack's verification steps."""

    passed: bool
    steps_run: list[VerifyStep] = field(default_factory=list)
    failed_step: VerifyStep | None = None
    exit_code: int = 0


def _run_step(step: VerifyStep, cwd: Path, runner: Runner) -> subprocess.CompletedProcess[str]:
    step_cwd = cwd / step.cwd if step.cwd else cwd
    return runner(
        list(step.argv),
        cwd=step_cwd,
        check=False,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
    )


def run_verification(
    stack: Stack,
    ui: UI,
    cwd: Path | None = None,
    runner: Runner = subprocess.run,
) -> VerifyResult:
    """Run each verification step in order, stopping at the first failure."""
    if cwd is None:
        cwd = Path.cwd()

    ui.section(f"Verifying {stack.name}")
    result = VerifyResult(passed=True)

    for step in stack.verify_steps:
        ui.info(f"  -> {step.label}...")
        result.steps_run.append(step)
        try:
            completed = _run_step(step, cwd, runner)
        except OSError as exc:
            ui.err(f"{step.display}: {exc}")
            result.passed = False
            result.failed_step = step
            result.exit_code = (
                PERMISSION_DENIED if isinstance(exc, PermissionError) else COMMAND_NOT_FOUND
            )
            return result

        output = completed.stdout or ""
        if completed.returncode != 0:
            ui.channel_header("VERIFY", step.display)
            for line in output.splitlines():
                ui.stream_line("VERIFY", line)
            ui.channel_footer("VERIFY", step.display)
            ui.err(f"{step.label} failed (exit {completed.returncode})")
            result.passed = False
            result.failed_step = step
            result.exit_code = completed.returncode
            return result

    ui.ok(f"{stack.name} verification passed")
    return result
