"""Tests for plan module."""

from __future__ import annotations

from pathlib import Path

from ralph_opencode.plan import PlanDocument

PLAN = """# Plan

Some prose that is not a task.

- [x] Set up project
- [ ] Add login form
* [X] Add logout
- [BLOCKED] [ ] Integrate payments
- [ ] [BLOCKED] Send emails
- [ ] Write docs
"""


class TestPlanDocument:
    def test_parse_counts(self) -> None:
        doc = PlanDocument.parse(PLAN)
        assert len(doc.tasks) == 6
        assert [t.text for t in doc.completed] == ["Set up project", "Add logout"]
        assert len(doc.pending) == 4

    def test_blocked_before_and_after_box(self) -> None:
        doc = PlanDocument.parse(PLAN)
        assert [t.text for t in doc.blocked] == ["Integrate payments", "Send emails"]

    def test_next_task_skips_blocked(self) -> None:
        doc = PlanDocument.parse(PLAN)
        task = doc.next_task()
        assert task is not None
        assert task.text == "Add login form"
        assert task.line_no == 6

    def test_next_task_none_when_only_blocked(self) -> None:
        doc = PlanDocument.parse("- [x] a\n- [BLOCKED] [ ] b\n")
        assert doc.next_task() is None
        assert len(doc.pending) == 1

    def test_ignores_non_checklist_lines(self) -> None:
        doc = PlanDocument.parse("- plain bullet\n[ ] no bullet\n-[ ] no space\n")
        assert doc.tasks == []

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "plan.md"
        path.write_text(PLAN)
        assert len(PlanDocument.load(path).tasks) == 6
