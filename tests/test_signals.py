"""Tests for signals module."""

from __future__ import annotations

import pytest

from ralph_opencode.signals import Signal, SubstringDetector


class TestSubstringDetector:
    def test_completion_detected(self) -> None:
        detector = SubstringDetector()
        assert detector.decide("all done\nRALPH_COMPLETE\n") is Signal.COMPLETE

    def test_completion_mid_line(self) -> None:
        detector = SubstringDetector()
        assert detector.decide("<promise>RALPH_COMPLETE</promise>") is Signal.COMPLETE

    def test_continue_without_sentinel(self) -> None:
        detector = SubstringDetector()
        assert detector.decide("RALPH COMPLETE") is Signal.CONTINUE
        assert detector.decide("") is Signal.CONTINUE

    def test_blocked_marker(self) -> None:
        detector = SubstringDetector()
        assert detector.is_blocked("- [BLOCKED] [ ] task") is True
        assert detector.is_blocked("- [blocked] [ ] task") is False

    def test_custom_sentinels(self) -> None:
        detector = SubstringDetector(completion="DONE!", blocked="")
        assert detector.decide("DONE!") is Signal.COMPLETE
        assert detector.is_blocked("[BLOCKED]") is False

    def test_empty_completion_rejected(self) -> None:
        with pytest.raises(ValueError):
            SubstringDetector(completion="")
