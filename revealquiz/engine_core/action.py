"""
Action System - Actions and results.

Actions represent:
1. Player input (guess, skip, restart)
2. Scheduled events (timer tick, deferred advance after a correct guess)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Player actions
    GUESS = "guess"
    SKIP = "skip"
    RESTART = "restart"

    # Scheduled actions
    TICK = "tick"
    ADVANCE = "advance"


class ErrorCode(str, Enum):
    """Structured reasons an action was rejected."""
    GAME_OVER = "GAME_OVER"
    EMPTY_GUESS = "EMPTY_GUESS"
    ADVANCE_PENDING = "ADVANCE_PENDING"
    NO_PENDING_ADVANCE = "NO_PENDING_ADVANCE"
    NOT_STARTED = "NOT_STARTED"
    SESSION_CLOSED = "SESSION_CLOSED"
    NO_HANDLER = "NO_HANDLER"


@dataclass(frozen=True)
class Action:
    """A complete action to be applied to the session state."""
    action_type: ActionType
    text: str | None = None  # Raw guess text for GUESS

    @classmethod
    def guess(cls, text: str) -> Action:
        """Factory for guess action."""
        return cls(action_type=ActionType.GUESS, text=text)

    @classmethod
    def skip(cls) -> Action:
        return cls(action_type=ActionType.SKIP)

    @classmethod
    def restart(cls) -> Action:
        return cls(action_type=ActionType.RESTART)

    @classmethod
    def tick(cls) -> Action:
        return cls(action_type=ActionType.TICK)

    @classmethod
    def advance(cls) -> Action:
        return cls(action_type=ActionType.ADVANCE)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - What happened, for the presentation layer
    """
    success: bool
    new_state: Any | None = None  # SessionState
    error: str | None = None
    error_code: ErrorCode | None = None

    outcome: Any | None = None  # GuessOutcome for GUESS
    points_awarded: int = 0
    question_changed: bool = False
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        **kwargs,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            **kwargs,
        )
