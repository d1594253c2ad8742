"""
Scoring and difficulty escalation.

Points fall as more of the image is revealed, down to a floor.
Each miss reveals more of the image, in growing steps.
"""

BASE_SCORE = 1000
PENALTY_FACTOR = 10
FLOOR_SCORE = 100

BASE_STEP = 5
STEP_PER_ATTEMPT = 2
MAX_STEP = 15


def score_for_reveal(
    reveal_percentage: int,
    base_score: int = BASE_SCORE,
    penalty_factor: int = PENALTY_FACTOR,
    floor_score: int = FLOOR_SCORE,
) -> int:
    """Points awarded for a correct guess at the given reveal percentage."""
    return max(base_score - round(reveal_percentage * penalty_factor), floor_score)


def next_reveal_percentage(current_percentage: int, wrong_attempts: int) -> int:
    """
    Reveal percentage after a missed guess.

    wrong_attempts includes the attempt just made.
    """
    increase = min(BASE_STEP + wrong_attempts * STEP_PER_ATTEMPT, MAX_STEP)
    return min(current_percentage + increase, 100)
