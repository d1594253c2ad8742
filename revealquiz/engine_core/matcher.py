"""
Answer Matcher - Classifies a free-text guess against accepted answers.

- correct: normalized guess equals some normalized accepted answer
- close: edit distance to some accepted answer is within the threshold
- wrong: neither
"""

from __future__ import annotations
from typing import Iterable

from .state import GuessOutcome

CLOSE_THRESHOLD = 2


def normalize(text: str) -> str:
    """Trim surrounding whitespace and lower-case."""
    return text.strip().lower()


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit cost insertion, deletion and substitution."""
    if not a or not b:
        return max(len(a), len(b))

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(min(
                    previous[j - 1] + 1,  # substitution
                    current[j - 1] + 1,  # insertion
                    previous[j] + 1,  # deletion
                ))
        previous = current
    return previous[-1]


def classify(
    raw_guess: str,
    accepted_answers: Iterable[str],
    close_threshold: int = CLOSE_THRESHOLD,
) -> GuessOutcome:
    """
    Classify a guess.

    The guess must not be blank; callers reject blank input before
    classification.
    """
    guess = normalize(raw_guess)
    if not guess:
        raise ValueError("Cannot classify a blank guess")

    answers = [normalize(a) for a in accepted_answers]
    if guess in answers:
        return GuessOutcome.CORRECT

    if any(levenshtein(guess, answer) <= close_threshold for answer in answers):
        return GuessOutcome.CLOSE

    return GuessOutcome.WRONG
