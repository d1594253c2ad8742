"""
Quiz Validation - Checks a QuizTest before a session may start.

Validates that:
1. The quiz has at least one question
2. Every question has an id and at least one non-blank accepted answer
3. Question ids are unique
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import QuizTest


class QuizValidationError(ValueError):
    """Raised when a quiz cannot be played."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"Quiz validation failed with {len(errors)} error(s): " + "; ".join(errors)
        )


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_quiz(quiz: QuizTest, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a quiz.

    Returns ValidationResult with errors and warnings.
    Raises QuizValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not quiz.questions:
        errors.append("quiz must have at least one question")

    seen: set[str] = set()
    for i, question in enumerate(quiz.questions):
        label = question.question_id or f"#{i + 1}"
        if not question.question_id:
            errors.append(f"question {label}: id is required")
        elif question.question_id in seen:
            errors.append(f"question {label}: duplicate id")
        seen.add(question.question_id)

        if not any(a.strip() for a in question.accepted_answers):
            errors.append(f"question {label}: at least one accepted answer is required")
        if not question.image_url:
            warnings.append(f"question {label}: no image_url")

    if not quiz.title:
        warnings.append("quiz has no title")

    result = ValidationResult(valid=not errors, errors=errors, warnings=warnings)
    if raise_on_error and errors:
        raise QuizValidationError(errors)
    return result
