"""
Pytest fixtures for RevealQuiz tests.
"""

import random

import pytest

from ..config import EngineConfig
from ..engine_core.state import Question, QuizTest
from ..engine_core.reducer import Reducer, initial_state
from ..session import GameSession, ManualScheduler, SessionManager


@pytest.fixture
def two_question_quiz() -> QuizTest:
    """Capitals quiz with two questions."""
    return QuizTest(
        test_id="capitals",
        title="Capitals",
        questions=(
            Question(
                question_id="q1",
                image_url="https://example.com/paris.jpg",
                prompt="Which city is this?",
                accepted_answers=("Paris",),
            ),
            Question(
                question_id="q2",
                image_url="https://example.com/rome.jpg",
                prompt="Which city is this?",
                accepted_answers=("Rome", "Roma"),
            ),
        ),
    )


@pytest.fixture
def three_question_quiz(two_question_quiz: QuizTest) -> QuizTest:
    """Capitals quiz with a third question."""
    return QuizTest(
        test_id="capitals_3",
        title="More Capitals",
        questions=two_question_quiz.questions + (
            Question(
                question_id="q3",
                image_url="https://example.com/oslo.jpg",
                accepted_answers=("Oslo",),
            ),
        ),
    )


@pytest.fixture
def empty_quiz() -> QuizTest:
    return QuizTest(test_id="empty", title="Empty")


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def reducer(config: EngineConfig) -> Reducer:
    """Reducer with a seeded random source."""
    return Reducer(config=config, rng=random.Random(7))


@pytest.fixture
def playing_state(two_question_quiz: QuizTest, config: EngineConfig):
    """Fresh state on the first question."""
    return initial_state(two_question_quiz, config, random.Random(7))


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def session(two_question_quiz: QuizTest, scheduler: ManualScheduler) -> GameSession:
    """Started session driven by a manual scheduler."""
    session = GameSession(two_question_quiz, scheduler=scheduler, seed=42)
    session.start()
    yield session
    session.teardown()


@pytest.fixture
def manager(scheduler: ManualScheduler) -> SessionManager:
    manager = SessionManager(scheduler=scheduler)
    yield manager
    manager.shutdown()
