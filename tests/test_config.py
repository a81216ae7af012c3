"""Tests for config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from ralph_opencode.config import (
    BLOCKED_MARKER,
    COMPLETION_SENTINEL,
    RunConfig,
    _parse_bool,
    _parse_int,
)


class TestParseBool:
    """Tests for _parse_bool helper."""

    def test_none_returns_false(self) -> None:
        assert _parse_bool(None) is False

    def test_truthy_values(self) -> None:
        assert _parse_bool("1") is True
        assert _parse_bool("TRUE") is True
        assert _parse_bool("yes") is True

    def test_other_values_return_false(self) -> None:
        assert _parse_bool("0") is False
        assert _parse_bool("no") is False
        assert _parse_bool("random") is False


class TestParseInt:
    def test_missing_uses_default(self) -> None:
        assert _parse_int(None, 25) == 25
        assert _parse_int("  ", 25) == 25

    def test_invalid_uses_default(self) -> None:
        assert _parse_int("many", 25) == 25

    def test_negative_is_kept(self) -> None:
        assert _parse_int("-2", 25) == -2


class TestRunConfig:
    """Tests for RunConfig."""

    def test_defaults(self) -> None:
        config = RunConfig()
        assert config.max_iterations == 25
        assert config.stack == "full"
        assert config.completion_sentinel == COMPLETION_SENTINEL == "RALPH_COMPLETE"
        assert config.blocked_marker == BLOCKED_MARKER == "[BLOCKED]"
        assert config.sleep_seconds == 2.0
        assert config.agent_cmd is None
        assert config.plan_file == Path("plan.md")

    def test_from_env_basic(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("MAX_ITERATIONS", "40")
        monkeypatch.setenv("RALPH_STACK", "expo")
        monkeypatch.setenv("SLEEP_SECONDS", "0.5")
        monkeypatch.setenv("AGENT_CMD", "my-agent")
        monkeypatch.setenv("PLAN_FILE", "docs/plan.md")

        config = RunConfig.from_env(tmp_path)

        assert config.max_iterations == 40
        assert config.stack == "expo"
        assert config.sleep_seconds == 0.5
        assert config.agent_cmd == "my-agent"
        assert config.plan_file == tmp_path / "docs" / "plan.md"

    def test_from_env_defaults(self, clean_env: None, tmp_path: Path) -> None:
        config = RunConfig.from_env(tmp_path)

        assert config.stack == "full"
        assert config.stacks_file is None
        assert config.log_dir == tmp_path / ".ralph" / "logs"

    def test_empty_log_dir_disables_logs(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("RALPH_LOG_DIR", "")
        config = RunConfig.from_env(tmp_path)
        assert config.log_dir is None

    def test_validate_requires_task(self) -> None:
        errors = RunConfig(task="   ").validate()
        assert any("Task description" in e for e in errors)

    def test_validate_accepts_non_positive_limit(self) -> None:
        assert RunConfig(task="do it", max_iterations=0).validate() == []

    def test_validate_negative_sleep(self) -> None:
        errors = RunConfig(task="do it", sleep_seconds=-1).validate()
        assert any("non-negative" in e for e in errors)
