"""CLI entry point for Ralph."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click
from click.core import ParameterSource

from ralph_opencode import __version__
from ralph_opencode.agents import LoggingAgent, OpenCodeAgent, get_agent
from ralph_opencode.config import RunConfig
from ralph_opencode.init_cmd import run_init
from ralph_opencode.loop import run_loop
from ralph_opencode.plan import PlanDocument
from ralph_opencode.runlog import build_summary, run_log_paths, write_summary
from ralph_opencode.stacks import StackConfigError, get_stack, load_stacks
from ralph_opencode.ui import UI, get_ui, normalize_ui_mode
from ralph_opencode.verify import run_verification

UI_CHOICES = ["auto", "rich", "plain"]


def _use_cli_value(ctx: click.Context, name: str) -> bool:
    return ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE


def _resolve_root(root: Path | None) -> Path:
    if root is not None:
        return root.resolve()
    return Path.cwd()


def _resolve_path(root: Path, value: str) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    return root / path


def _make_ui(mode: str, no_color: bool, ascii_only: bool = False) -> UI:
    force_rich = os.environ.get("RALPH_FORCE_RICH") == "1"
    return get_ui(normalize_ui_mode(mode), no_color, ascii_only, force_rich=force_rich)


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Ralph - run the opencode agent in a loop until the plan is done."""
    pass


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("task")
@click.argument("max_iterations", type=int, required=False)
@click.argument("stack", required=False)
@click.option(
    "--root",
    type=click.Path(path_type=Path),
    help="Project root path (defaults to current directory)",
)
@click.option(
    "--agent-cmd",
    help="Custom agent command (task piped to stdin)",
)
@click.option(
    "--model", "-m",
    help="Model for the opencode agent",
)
@click.option(
    "--sleep", "-s",
    type=float,
    default=2.0,
    help="Sleep seconds between iterations",
)
@click.option(
    "--plan",
    type=str,
    help="Plan file path (shown in warnings only)",
)
@click.option(
    "--stacks-file",
    type=str,
    help="JSON file with extra or overriding stack definitions",
)
@click.option(
    "--log-dir",
    type=str,
    help="Directory for run logs (default: .ralph/logs)",
)
@click.option(
    "--no-log",
    is_flag=True,
    help="Do not write run logs",
)
@click.option(
    "--ui",
    type=click.Choice(UI_CHOICES),
    default="auto",
    help="UI mode",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colors",
)
@click.option(
    "--ascii",
    is_flag=True,
    help="Use ASCII characters only",
)
def run(
    task: str,
    max_iterations: int | None,
    stack: str | None,
    root: Path | None,
    agent_cmd: str | None,
    model: str | None,
    sleep: float,
    plan: str | None,
    stacks_file: str | None,
    log_dir: str | None,
    no_log: bool,
    ui: str,
    no_color: bool,
    ascii: bool,
) -> None:
    """Run the agent loop.

    TASK is the task description handed to the agent every iteration.
    MAX_ITERATIONS defaults to 25, STACK defaults to "full".
    """
    ctx = click.get_current_context()
    root_dir = _resolve_root(root if _use_cli_value(ctx, "root") else None)

    # Build config from environment defaults first.
    config = RunConfig.from_env(root_dir)
    config.task = task

    # Apply CLI overrides when explicitly provided.
    if max_iterations is not None:
        config.max_iterations = max_iterations
    if stack:
        config.stack = stack
    if _use_cli_value(ctx, "agent_cmd"):
        config.agent_cmd = agent_cmd
    if _use_cli_value(ctx, "model"):
        config.model = model
    if _use_cli_value(ctx, "sleep"):
        config.sleep_seconds = sleep
    if _use_cli_value(ctx, "plan") and plan:
        config.plan_file = _resolve_path(root_dir, plan)
    if _use_cli_value(ctx, "stacks_file") and stacks_file:
        config.stacks_file = _resolve_path(root_dir, stacks_file)
    if _use_cli_value(ctx, "log_dir") and log_dir:
        config.log_dir = _resolve_path(root_dir, log_dir)
    if no_log:
        config.log_dir = None
    if _use_cli_value(ctx, "ui"):
        config.ui_mode = ui
    if _use_cli_value(ctx, "no_color"):
        config.no_color = no_color
    if _use_cli_value(ctx, "ascii"):
        config.ascii_only = ascii

    ui_impl = _make_ui(config.ui_mode, config.no_color, config.ascii_only)

    errors = config.validate()
    if errors:
        for error in errors:
            ui_impl.err(error)
        sys.exit(2)

    try:
        stacks = load_stacks(config.stacks_file)
    except StackConfigError as exc:
        ui_impl.err(str(exc))
        sys.exit(2)

    stack_def = get_stack(config.stack, stacks)
    if stack_def is None:
        ui_impl.warn(f"Unknown stack '{config.stack}'; passing it to the agent as-is")

    if not config.agent_cmd and not OpenCodeAgent.is_available():
        ui_impl.err("opencode not found in PATH")
        ui_impl.info("Install opencode or use --agent-cmd to specify a custom agent")
        sys.exit(1)

    agent = get_agent(config.agent_cmd, config.model)
    paths = None
    if config.log_dir is not None:
        paths = run_log_paths(config.log_dir)
        agent = LoggingAgent(agent, paths.log_path)

    result = run_loop(config, ui_impl, agent, cwd=root_dir, stack=stack_def)

    if paths is not None:
        log_path = paths.log_path if paths.log_path.exists() else None
        write_summary(paths.summary_path, build_summary(config, result, log_path))
        ui_impl.kv("Summary", str(paths.summary_path))

    sys.exit(result.exit_code)


@cli.command()
@click.argument("stack", required=False)
@click.option(
    "--root",
    type=click.Path(path_type=Path),
    help="Project root path (defaults to current directory)",
)
@click.option(
    "--stacks-file",
    type=str,
    help="JSON file with extra or overriding stack definitions",
)
@click.option(
    "--ui",
    type=click.Choice(UI_CHOICES),
    default="auto",
    help="UI mode",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colors",
)
def verify(
    stack: str | None,
    root: Path | None,
    stacks_file: str | None,
    ui: str,
    no_color: bool,
) -> None:
    """Run the verification commands for STACK (default: RALPH_STACK or "full")."""
    root_dir = _resolve_root(root)
    config = RunConfig.from_env(root_dir)
    if stack:
        config.stack = stack
    if stacks_file:
        config.stacks_file = _resolve_path(root_dir, stacks_file)

    ui_impl = _make_ui(ui, no_color or config.no_color)

    try:
        stacks = load_stacks(config.stacks_file)
    except StackConfigError as exc:
        ui_impl.err(str(exc))
        sys.exit(2)

    stack_def = get_stack(config.stack, stacks)
    if stack_def is None:
        ui_impl.err(f"Unknown stack: {config.stack}")
        ui_impl.info(f"Available: {', '.join(sorted(stacks))}")
        sys.exit(2)

    result = run_verification(stack_def, ui_impl, root_dir)
    sys.exit(result.exit_code)


@cli.command()
@click.option(
    "--root",
    type=click.Path(path_type=Path),
    help="Project root path (defaults to current directory)",
)
@click.option(
    "--plan",
    type=str,
    help="Plan file path (default: plan.md)",
)
@click.option(
    "--ui",
    type=click.Choice(UI_CHOICES),
    default="auto",
    help="UI mode",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colors",
)
def status(root: Path | None, plan: str | None, ui: str, no_color: bool) -> None:
    """Summarize the plan document."""
    root_dir = _resolve_root(root)
    config = RunConfig.from_env(root_dir)
    if plan:
        config.plan_file = _resolve_path(root_dir, plan)

    ui_impl = _make_ui(ui, no_color or config.no_color)
    ui_impl.section("Plan")
    ui_impl.kv("File", str(config.plan_file))

    if not config.plan_file.exists():
        ui_impl.err(f"Plan file not found: {config.plan_file}")
        sys.exit(1)

    doc = PlanDocument.load(config.plan_file)
    ui_impl.kv("Tasks", str(len(doc.tasks)))
    ui_impl.kv("Done", str(len(doc.completed)))
    ui_impl.kv("Pending", str(len(doc.pending)))
    ui_impl.kv("Blocked", str(len(doc.blocked)))

    if doc.blocked:
        ui_impl.panel(
            "PLAN",
            "Blocked",
            "\n".join(f"- {task.text} (line {task.line_no})" for task in doc.blocked),
        )

    next_task = doc.next_task()
    if next_task is not None:
        ui_impl.kv("Next", next_task.text)
    elif not doc.pending:
        ui_impl.ok("All tasks complete")
    sys.exit(0)


@cli.command(name="stacks")
@click.option(
    "--stacks-file",
    type=str,
    help="JSON file with extra or overriding stack definitions",
)
@click.option(
    "--ui",
    type=click.Choice(UI_CHOICES),
    default="auto",
    help="UI mode",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colors",
)
def list_stacks(stacks_file: str | None, ui: str, no_color: bool) -> None:
    """List known stacks and their verification commands."""
    ui_impl = _make_ui(ui, no_color)
    path = Path(stacks_file) if stacks_file else None
    try:
        stacks = load_stacks(path)
    except StackConfigError as exc:
        ui_impl.err(str(exc))
        sys.exit(2)

    for name in sorted(stacks):
        stack = stacks[name]
        lines = [stack.description, ""] if stack.description else []
        lines.extend(f"- {step.display}" for step in stack.verify_steps)
        if stack.commit_prefixes:
            lines.append("")
            lines.append("Commit prefixes: " + ", ".join(stack.commit_prefixes))
        ui_impl.panel("STACK", name, "\n".join(lines))


@cli.command()
@click.argument("directory", type=click.Path(path_type=Path), default=".")
@click.option(
    "--stack",
    default="full",
    help="Stack whose verification commands go into AGENTS.md",
)
@click.option(
    "--ui",
    type=click.Choice(UI_CHOICES),
    default="auto",
    help="UI mode",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colors",
)
def init(directory: Path, stack: str, ui: str, no_color: bool) -> None:
    """Create plan.md and AGENTS.md in a project directory.

    DIRECTORY is the target project directory (default: current directory).
    """
    ui_impl = _make_ui(ui, no_color)
    exit_code = run_init(directory, ui_impl, stack)
    sys.exit(exit_code)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
