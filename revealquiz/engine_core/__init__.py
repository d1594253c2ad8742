"""
Engine Core - Deterministic guessing game state and transitions.

The engine is the runtime that:
1. Accepts a loaded QuizTest
2. Manages SessionState
3. Picks revealed grid cells
4. Classifies guesses against accepted answers
5. Applies actions via the reducer
"""

from .state import (
    Question, QuizTest, GuessRecord, GuessOutcome, GamePhase, SessionState,
    GameSummary,
)
from .action import Action, ActionType, ActionResult, ErrorCode
from .reducer import Reducer, apply_action, initial_state
from .reveal import generate_reveal, reveal_count
from .matcher import classify, normalize, levenshtein
from .scoring import score_for_reveal, next_reveal_percentage
from .validation import QuizValidationError, ValidationResult, validate_quiz

__all__ = [
    "Question",
    "QuizTest",
    "GuessRecord",
    "GuessOutcome",
    "GamePhase",
    "SessionState",
    "GameSummary",
    "Action",
    "ActionType",
    "ActionResult",
    "ErrorCode",
    "Reducer",
    "apply_action",
    "initial_state",
    "generate_reveal",
    "reveal_count",
    "classify",
    "normalize",
    "levenshtein",
    "score_for_reveal",
    "next_reveal_percentage",
    "QuizValidationError",
    "ValidationResult",
    "validate_quiz",
]
