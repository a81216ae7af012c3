"""Init command for Ralph - scaffold plan and guidance files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ralph_opencode.config import BLOCKED_MARKER, COMPLETION_SENTINEL
from ralph_opencode.plan import PlanDocument
from ralph_opencode.stacks import get_stack

if TYPE_CHECKING:
    from ralph_opencode.stacks import Stack
    from ralph_opencode.ui.base import UI

DEFAULT_PLAN = f"""# Plan

One task per line. Ralph's agent picks the first unchecked task each
iteration, verifies it, commits, and checks it off.
Prefix a task with {BLOCKED_MARKER} when it cannot be completed.

## Tasks
- [ ] Describe the first task here
"""

GITIGNORE_ENTRIES = """# Ralph run logs
logs/
"""


def default_guidance(stack: Stack | None) -> str:
    """Build the AGENTS.md guidance document for a stack."""
    lines = [
        "# Agent Guidance",
        "",
        "## Loop rules",
        "1. Read plan.md and pick exactly one unchecked task.",
        "2. Implement it.",
        "3. Run the verification commands below; fix failures before committing.",
        "4. Commit with one of the commit prefixes below.",
        "5. Check the task off in plan.md.",
        f"6. Mark tasks you cannot finish with {BLOCKED_MARKER}.",
        f"7. When every task is checked, output {COMPLETION_SENTINEL}.",
        "",
    ]
    if stack is not None:
        lines.append(f"## Verification ({stack.name})")
        lines.extend(f"- `{step.display}`" for step in stack.verify_steps)
        lines.append("")
        lines.append("## Commit prefixes")
        lines.extend(f"- `{prefix}:`" for prefix in stack.commit_prefixes)
        lines.append("")
    lines.extend(["## Learnings", "- (Append patterns discovered during iterations)", ""])
    return "\n".join(lines)


def run_init(directory: Path, ui: UI, stack_name: str = "full") -> int:
    """Initialize Ralph files in a project directory.

    Args:
        directory: Target project directory
        ui: UI for output
        stack_name: Stack whose verification commands go into AGENTS.md

    Returns:
        Exit code (0=success, 2=not a directory)
    """
    ui.title("Ralph Init")

    ui.section("Target")
    if not directory.is_dir():
        ui.err(f"Not a directory: {directory}")
        return 2

    root = directory.resolve()
    ui.kv("Directory", str(root))

    stack = get_stack(stack_name)
    if stack is None:
        ui.warn(f"Unknown stack '{stack_name}'; AGENTS.md will have no verification section")
    else:
        ui.kv("Stack", stack.name)

    ui.section("Create defaults")
    _create_if_missing(root / "plan.md", DEFAULT_PLAN, ui)
    _create_if_missing(root / "AGENTS.md", default_guidance(stack), ui)
    _create_if_missing(root / ".ralph" / ".gitignore", GITIGNORE_ENTRIES, ui)

    ui.section("Plan summary")
    plan = PlanDocument.load(root / "plan.md")
    ui.kv("Tasks", str(len(plan.tasks)))
    ui.kv("Done", str(len(plan.completed)))
    ui.kv("Blocked", str(len(plan.blocked)))

    ui.section("Next steps")
    ui.info("1. Add tasks to plan.md")
    ui.info(f'2. Run: ralph run "<task>" [iterations] [{stack_name}]')

    return 0


def _create_if_missing(path: Path, content: str, ui: UI) -> None:
    """Create file if it doesn't exist."""
    if path.exists():
        ui.info(f"  {path.name} already exists")
    else:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        ui.ok(f"  Created {path.name}")
