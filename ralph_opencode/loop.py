"""Main iteration loop for Ralph."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from ralph_opencode.agents.base import AgentInvocationError
from ralph_opencode.signals import Signal, SignalDetector, SubstringDetector

if TYPE_CHECKING:
    from ralph_opencode.agents.base import Agent
    from ralph_opencode.config import RunConfig
    from ralph_opencode.stacks import Stack
    from ralph_opencode.ui.base import UI


class Outcome(Enum):
    """Terminal state of a run."""

    COMPLETED = "completed"
    EXHAUSTED = "exhausted"


@dataclass
class LoopResult:
    """Result of running the iteration loop."""

    outcome: Outcome
    iterations: int
    blocked_iterations: list[int] = field(default_factory=list)
    failed_iterations: list[int] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.outcome is Outcome.COMPLETED

    @property
    def exit_code(self) -> int:
        return 0 if self.completed else 1


def run_loop(
    config: RunConfig,
    ui: UI,
    agent: Agent,
    detector: SignalDetector | None = None,
    cwd: Path | None = None,
    stack: Stack | None = None,
) -> LoopResult:
    """Run the agent until it signals completion or the budget runs out.

    Args:
        config: Run configuration
        ui: UI implementation for output
        agent: Agent to invoke once per iteration
        detector: Completion/blocked detection strategy (defaults to
            substring matching on the configured sentinels)
        cwd: Working directory for the agent (defaults to current)
        stack: Resolved stack definition, shown at startup when known

    Returns:
        LoopResult with the outcome and iteration counts
    """
    if cwd is None:
        cwd = Path.cwd()
    if detector is None:
        detector = SubstringDetector(config.completion_sentinel, config.blocked_marker)

    ui.title("Ralph")

    ui.section("Startup")
    ui.kv("Root", str(cwd))
    ui.kv("Task", config.task)
    ui.kv("Max iterations", str(config.max_iterations))
    ui.kv("Stack", config.stack)
    ui.kv("Agent", agent.name)
    ui.kv("Sleep", f"{config.sleep_seconds}s")
    if stack is not None:
        steps = "\n".join(f"- {step.display}" for step in stack.verify_steps)
        ui.panel("STACK", f"{stack.name} verification", steps or "(none)")

    result = LoopResult(outcome=Outcome.EXHAUSTED, iterations=0)

    iteration = 0
    while iteration < config.max_iterations:
        iteration += 1
        result.iterations = iteration
        ui.section(f"Iteration {iteration} / {config.max_iterations}")

        ui.channel_header("AI", "Agent output")
        output_lines: list[str] = []
        try:
            for line in agent.invoke(config.task, config.stack, cwd):
                output_lines.append(line)
                ui.stream_line("AI", line)
        except AgentInvocationError as exc:
            ui.channel_footer("AI", "Agent output")
            ui.warn(f"Agent invocation failed: {exc}")
            result.failed_iterations.append(iteration)
        else:
            ui.channel_footer("AI", "Agent output")
            exit_code = agent.exit_code
            if exit_code not in (None, 0):
                ui.warn(f"Agent exited with status {exit_code}; continuing")
                result.failed_iterations.append(iteration)

        output = "\n".join(output_lines)

        if detector.decide(output) is Signal.COMPLETE:
            ui.ok(f"Ralph completed successfully after {iteration} iterations")
            result.outcome = Outcome.COMPLETED
            return result

        if detector.is_blocked(output):
            ui.warn(f"Some tasks are blocked. Check {config.plan_file} for details.")
            result.blocked_iterations.append(iteration)

        if iteration < config.max_iterations:
            time.sleep(config.sleep_seconds)

    ui.warn(f"Max iterations ({config.max_iterations}) reached.")
    ui.info(f"Check {config.plan_file} for remaining tasks.")
    return result
