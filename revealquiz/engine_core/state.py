"""
Quiz State - Immutable quiz data and the per-session game state.

Design principles:
- Immutable: all transitions return a new SessionState
- Snapshot-friendly: the current state object IS the read-only snapshot
- Quiz data (QuizTest, Question) never changes during a session
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping


class GamePhase(Enum):
    """High-level session phases."""
    LOADING = "loading"
    PLAYING = "playing"  # Awaiting a guess
    REVEALING = "revealing"  # Correct guess shown, advance pending
    GAME_OVER = "game_over"


class GuessOutcome(Enum):
    """Classification of a guess against the accepted answers."""
    CORRECT = "correct"
    CLOSE = "close"
    WRONG = "wrong"


@dataclass(frozen=True)
class Question:
    """
    A single question of a quiz.

    Accepted answers are matched case-insensitively; any one match
    is sufficient.
    """
    question_id: str
    image_url: str
    prompt: str = ""
    accepted_answers: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int = 0) -> Question:
        """Build a question from a JSON-shaped mapping."""
        answers = data.get("answers")
        if answers is None:
            single = data.get("answer")
            answers = [single] if single is not None else []
        elif isinstance(answers, str):
            answers = [answers]

        return cls(
            question_id=str(data.get("id", f"q{index + 1}")),
            image_url=str(data.get("image_url") or data.get("imageUrl") or ""),
            prompt=str(data.get("prompt") or data.get("question") or ""),
            accepted_answers=tuple(str(a) for a in answers),
        )


@dataclass(frozen=True)
class QuizTest:
    """
    A test: ordered questions played in sequence order.

    Supplied once at session start by whatever loaded it.
    """
    test_id: str
    title: str
    questions: tuple[Question, ...] = ()

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QuizTest:
        """
        Build a quiz from a JSON-shaped mapping.

        Raises QuizValidationError if the data is not shaped like a quiz.
        """
        from .validation import QuizValidationError

        if not isinstance(data, Mapping):
            raise QuizValidationError([f"Quiz must be an object, got {type(data).__name__}"])

        raw_questions = data.get("questions") or []
        if not isinstance(raw_questions, list):
            raise QuizValidationError(["'questions' must be a list"])
        errors = [
            f"Question {i + 1} must be an object"
            for i, q in enumerate(raw_questions)
            if not isinstance(q, Mapping)
        ]
        if errors:
            raise QuizValidationError(errors)

        return cls(
            test_id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            questions=tuple(
                Question.from_dict(q, index=i) for i, q in enumerate(raw_questions)
            ),
        )


@dataclass(frozen=True)
class GuessRecord:
    """A normalized guess and how it was classified."""
    text: str
    outcome: GuessOutcome


@dataclass(frozen=True)
class SessionState:
    """
    Complete session state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    test: QuizTest
    grid_size: int = 4

    phase: GamePhase = GamePhase.LOADING
    current_question_index: int = 0
    score: int = 0

    # Per-question state (reset on every question change)
    reveal_percentage: int = 0
    revealed_cells: frozenset[int] = frozenset()
    wrong_attempts: int = 0
    guess_history: tuple[GuessRecord, ...] = ()  # Most recent first
    question_started_at: int = 0

    # Session-wide
    elapsed_seconds: int = 0
    total_attempts: int = 0
    correct_count: int = 0
    skipped_count: int = 0

    @property
    def game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def current_question(self) -> Question:
        return self.test.questions[self.current_question_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_question_index >= self.test.question_count - 1

    @property
    def cell_count(self) -> int:
        return self.grid_size * self.grid_size

    @property
    def visible_percentage(self) -> int:
        """Share of grid cells currently showing the image, for display."""
        return round(len(self.revealed_cells) / self.cell_count * 100)

    @property
    def question_elapsed_seconds(self) -> int:
        return self.elapsed_seconds - self.question_started_at

    def _copy_with(self, **kwargs) -> SessionState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


@dataclass(frozen=True)
class GameSummary:
    """End-of-game statistics shown on the results screen."""
    score: int
    completion_time: int
    attempts_count: int
    correct_count: int
    skipped_count: int
    question_count: int
    is_success: bool = field(default=False)

    @classmethod
    def from_state(cls, state: SessionState) -> GameSummary:
        return cls(
            score=state.score,
            completion_time=state.elapsed_seconds,
            attempts_count=state.total_attempts,
            correct_count=state.correct_count,
            skipped_count=state.skipped_count,
            question_count=state.test.question_count,
            is_success=state.correct_count > 0,
        )
