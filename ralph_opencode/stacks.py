"""Stack registry: verification commands and commit tags per stack."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

COMMIT_TYPES = ("feat", "fix", "refactor", "test", "chore")


class StackConfigError(ValueError):
    """Raised when a stacks file cannot be loaded."""

    def __init__(self, path: Path, errors: list[str]):
        self.path = path
        self.errors = errors
        super().__init__(f"Invalid stacks file {path}: {'; '.join(errors)}")


@dataclass(frozen=True)
class VerifyStep:
    """A single verification command."""

    label: str
    argv: tuple[str, ...]
    cwd: str | None = None

    @property
    def display(self) -> str:
        command = " ".join(self.argv)
        if self.cwd:
            return f"(cd {self.cwd} && {command})"
        return command


@dataclass(frozen=True)
class Stack:
    """A stack selector and the verification it implies."""

    name: str
    description: str
    verify_steps: tuple[VerifyStep, ...]
    commit_prefixes: tuple[str, ...] = field(default_factory=tuple)


def _commit_prefixes(scope: str) -> tuple[str, ...]:
    return tuple(f"{kind}({scope})" for kind in COMMIT_TYPES)


PHOENIX_STEPS = (
    VerifyStep("Compiling", ("mix", "compile", "--warnings-as-errors")),
    VerifyStep("Checking format", ("mix", "format", "--check-formatted")),
    VerifyStep("Running Credo", ("mix", "credo", "--strict")),
    VerifyStep("Running tests", ("mix", "test")),
)

REACT_STEPS = (
    VerifyStep("Type checking", ("npm", "run", "typecheck"), cwd="assets"),
    VerifyStep("Linting", ("npm", "run", "lint"), cwd="assets"),
    VerifyStep("Running tests", ("npm", "test"), cwd="assets"),
)

EXPO_STEPS = (
    VerifyStep("Type checking", ("npm", "run", "typecheck")),
    VerifyStep("Linting", ("npm", "run", "lint")),
    VerifyStep("Running tests", ("npm", "test")),
)

BUILTIN_STACKS: dict[str, Stack] = {
    "phoenix": Stack(
        name="phoenix",
        description="Elixir/Phoenix backend",
        verify_steps=PHOENIX_STEPS,
        commit_prefixes=_commit_prefixes("phoenix"),
    ),
    "react": Stack(
        name="react",
        description="React frontend under assets/",
        verify_steps=REACT_STEPS,
        commit_prefixes=_commit_prefixes("react"),
    ),
    "expo": Stack(
        name="expo",
        description="Expo / React Native app",
        verify_steps=EXPO_STEPS,
        commit_prefixes=_commit_prefixes("expo"),
    ),
    "full": Stack(
        name="full",
        description="Phoenix backend with React frontend",
        verify_steps=PHOENIX_STEPS + REACT_STEPS,
        commit_prefixes=_commit_prefixes("phoenix") + _commit_prefixes("react"),
    ),
}


def load_stacks(path: Path | None = None) -> dict[str, Stack]:
    """Return the stack registry, merged with a JSON stacks file if given.

    Entries in the file replace built-in stacks with the same name.
    """
    stacks = dict(BUILTIN_STACKS)
    if path is None:
        return stacks

    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise StackConfigError(path, ["file not found"]) from exc
    except json.JSONDecodeError as exc:
        raise StackConfigError(path, [f"invalid JSON: {exc}"]) from exc

    errors = validate_schema(data)
    if errors:
        raise StackConfigError(path, errors)

    for name, entry in data["stacks"].items():
        stacks[name] = _stack_from_dict(name, entry)
    return stacks


def get_stack(name: str, stacks: dict[str, Stack] | None = None) -> Stack | None:
    """Look up a stack by selector."""
    if stacks is None:
        stacks = BUILTIN_STACKS
    return stacks.get(name)


def validate_schema(data: Any) -> list[str]:
    """Validate a stacks file, returning list of errors."""
    errors: list[str] = []

    if not isinstance(data, dict) or "stacks" not in data:
        errors.append("stacks file must be a JSON object with a 'stacks' key")
        return errors

    stacks = data["stacks"]
    if not isinstance(stacks, dict):
        errors.append("stacks must be an object keyed by stack name")
        return errors

    for name, entry in stacks.items():
        prefix = f"stacks.{name}"
        if not isinstance(entry, dict):
            errors.append(f"{prefix}: must be an object")
            continue

        description = entry.get("description", "")
        if not isinstance(description, str):
            errors.append(f"{prefix}.description: must be a string")

        verify = entry.get("verify")
        if not isinstance(verify, list):
            errors.append(f"{prefix}.verify: must be an array")
        else:
            for i, step in enumerate(verify):
                step_prefix = f"{prefix}.verify[{i}]"
                if not isinstance(step, dict):
                    errors.append(f"{step_prefix}: must be an object")
                    continue
                argv = step.get("argv")
                if not isinstance(argv, list) or not argv:
                    errors.append(f"{step_prefix}.argv: must be a non-empty array")
                elif not all(isinstance(arg, str) for arg in argv):
                    errors.append(f"{step_prefix}.argv: all items must be strings")
                if "label" in step and not isinstance(step["label"], str):
                    errors.append(f"{step_prefix}.label: must be a string")
                if step.get("cwd") is not None and not isinstance(step["cwd"], str):
                    errors.append(f"{step_prefix}.cwd: must be a string")

        prefixes = entry.get("commit_prefixes", [])
        if not isinstance(prefixes, list) or not all(isinstance(p, str) for p in prefixes):
            errors.append(f"{prefix}.commit_prefixes: must be an array of strings")

    return errors


def _stack_from_dict(name: str, entry: dict[str, Any]) -> Stack:
    steps = tuple(
        VerifyStep(
            label=step.get("label") or " ".join(step["argv"]),
            argv=tuple(step["argv"]),
            cwd=step.get("cwd"),
        )
        for step in entry["verify"]
    )
    return Stack(
        name=name,
        description=entry.get("description", ""),
        verify_steps=steps,
        commit_prefixes=tuple(entry.get("commit_prefixes", [])),
    )
