"""Deciding loop continuation from agent output."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from ralph_opencode.config import BLOCKED_MARKER, COMPLETION_SENTINEL


class Signal(Enum):
    """What an iteration's output tells the loop to do."""

    CONTINUE = "continue"
    COMPLETE = "complete"


class SignalDetector(Protocol):
    """Strategy for turning raw agent output into a Signal."""

    def decide(self, text: str) -> Signal:
        ...

    def is_blocked(self, text: str) -> bool:
        ...


class SubstringDetector:
    """Exact, case-sensitive substring matching against captured output."""

    def __init__(
        self,
        completion: str = COMPLETION_SENTINEL,
        blocked: str = BLOCKED_MARKER,
    ):
        if not completion:
            raise ValueError("completion sentinel must not be empty")
        self.completion = completion
        self.blocked = blocked

    def decide(self, text: str) -> Signal:
        if self.completion in text:
            return Signal.COMPLETE
        return Signal.CONTINUE

    def is_blocked(self, text: str) -> bool:
        return bool(self.blocked) and self.blocked in text
