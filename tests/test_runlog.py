"""Tests for runlog module."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from ralph_opencode.config import RunConfig
from ralph_opencode.loop import LoopResult, Outcome
from ralph_opencode.runlog import build_summary, run_log_paths, write_summary


class TestRunLog:
    def test_paths_are_timestamped(self, tmp_path: Path) -> None:
        paths = run_log_paths(tmp_path, "my run!", now=datetime(2026, 1, 2, 3, 4, 5))
        assert paths.log_path == tmp_path / "20260102-030405-000000_my_run_.log"
        assert paths.summary_path == tmp_path / "20260102-030405-000000_my_run_.summary.json"

    def test_paths_do_not_collide(self, tmp_path: Path) -> None:
        now = datetime(2026, 1, 2, 3, 4, 5, 123456)
        first = run_log_paths(tmp_path, now=now)
        first.log_path.write_text("")

        second = run_log_paths(tmp_path, now=now)

        assert first.log_path.name == "20260102-030405-123456_run.log"
        assert second.log_path.name == "20260102-030405-123456_run-1.log"
        assert second.summary_path.name == "20260102-030405-123456_run-1.summary.json"

    def test_summary_round_trip(self, tmp_path: Path) -> None:
        config = RunConfig(task="add a button", max_iterations=5, stack="react")
        result = LoopResult(
            outcome=Outcome.EXHAUSTED,
            iterations=5,
            blocked_iterations=[2],
            failed_iterations=[1, 4],
        )

        payload = build_summary(config, result, tmp_path / "run.log")
        path = write_summary(tmp_path / "nested" / "run.summary.json", payload)

        data = json.loads(path.read_text())
        assert data["outcome"] == "exhausted"
        assert data["exit_code"] == 1
        assert data["blocked_iterations"] == [2]
        assert data["failed_iterations"] == [1, 4]
        assert data["log_path"] == str(tmp_path / "run.log")
