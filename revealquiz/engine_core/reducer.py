"""
Reducer - Applies actions to session state.

The reducer is the single point of state mutation.
All state changes must go through apply().

Design principles:
- Pure apart from randomness: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure
- Never raises for rejected player input
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random

from ..config import EngineConfig
from .state import SessionState, QuizTest, GamePhase, GuessRecord, GuessOutcome
from .action import Action, ActionType, ActionResult, ErrorCode
from .matcher import classify, normalize
from .reveal import generate_reveal
from .scoring import score_for_reveal, next_reveal_percentage
from .validation import validate_quiz


def initial_state(
    quiz: QuizTest,
    config: EngineConfig | None = None,
    rng: random.Random | None = None,
) -> SessionState:
    """
    Create the starting state for a quiz.

    Raises QuizValidationError if the quiz cannot be played.
    """
    config = config or EngineConfig()
    validate_quiz(quiz, raise_on_error=True)

    return SessionState(
        test=quiz,
        grid_size=config.grid_size,
        phase=GamePhase.PLAYING,
        reveal_percentage=config.base_reveal_percentage,
        revealed_cells=generate_reveal(config.grid_size, config.base_reveal_percentage, rng),
    )


@dataclass
class Reducer:
    """
    Reducer applies actions to session state.

    Stateless - all state is in SessionState.
    Config provides the constants; rng drives cell selection.
    """
    config: EngineConfig = field(default_factory=EngineConfig)
    rng: random.Random = field(default_factory=random.Random)

    def apply(self, state: SessionState, action: Action) -> ActionResult:
        """
        Apply an action to the session state.

        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return validation_error

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )
        return handler(state, action)

    def _validate_action(self, state: SessionState, action: Action) -> ActionResult | None:
        """
        Check that an action is allowed in the current phase.

        Returns a failure result if not, None if allowed.
        """
        if action.action_type == ActionType.RESTART:
            return None

        if state.phase == GamePhase.LOADING:
            return ActionResult.failure("Session not started", ErrorCode.NOT_STARTED)

        if state.phase == GamePhase.GAME_OVER:
            return ActionResult.failure(
                "Game is over - only restart is allowed", ErrorCode.GAME_OVER
            )

        if action.action_type == ActionType.GUESS:
            if state.phase == GamePhase.REVEALING:
                return ActionResult.failure(
                    "Question already answered - advance pending",
                    ErrorCode.ADVANCE_PENDING,
                )
            if not action.text or not action.text.strip():
                return ActionResult.failure("Please enter a guess", ErrorCode.EMPTY_GUESS)

        if action.action_type == ActionType.ADVANCE and state.phase != GamePhase.REVEALING:
            return ActionResult.failure(
                "No answered question to advance from", ErrorCode.NO_PENDING_ADVANCE
            )

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.GUESS: self._handle_guess,
            ActionType.SKIP: self._handle_skip,
            ActionType.ADVANCE: self._handle_advance,
            ActionType.RESTART: self._handle_restart,
            ActionType.TICK: self._handle_tick,
        }
        return handlers.get(action_type)

    def _handle_guess(self, state: SessionState, action: Action) -> ActionResult:
        """Classify a guess, then score it or reveal more."""
        question = state.current_question
        outcome = classify(
            action.text,
            question.accepted_answers,
            close_threshold=self.config.close_threshold,
        )
        history = (GuessRecord(text=normalize(action.text), outcome=outcome),) + state.guess_history

        if outcome == GuessOutcome.CORRECT:
            points = score_for_reveal(
                state.reveal_percentage,
                base_score=self.config.base_score,
                penalty_factor=self.config.penalty_factor,
                floor_score=self.config.floor_score,
            )
            new_state = state._copy_with(
                phase=GamePhase.REVEALING,
                score=state.score + points,
                guess_history=history,
                total_attempts=state.total_attempts + 1,
                correct_count=state.correct_count + 1,
            )
            return ActionResult.success_with_state(
                new_state,
                changes=[f"Correct answer for {question.question_id}: +{points}"],
                outcome=outcome,
                points_awarded=points,
            )

        wrong_attempts = state.wrong_attempts + 1
        percentage = next_reveal_percentage(state.reveal_percentage, wrong_attempts)
        new_state = state._copy_with(
            reveal_percentage=percentage,
            revealed_cells=generate_reveal(state.grid_size, percentage, self.rng),
            wrong_attempts=wrong_attempts,
            guess_history=history,
            total_attempts=state.total_attempts + 1,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{outcome.value.capitalize()} guess, reveal now {percentage}%"],
            outcome=outcome,
        )

    def _handle_skip(self, state: SessionState, action: Action) -> ActionResult:
        """Skip the current question without scoring."""
        if state.phase == GamePhase.REVEALING:
            return self._next_question(state)
        result = self._next_question(state._copy_with(skipped_count=state.skipped_count + 1))
        result.state_changes.insert(0, f"Skipped {state.current_question.question_id}")
        return result

    def _handle_advance(self, state: SessionState, action: Action) -> ActionResult:
        """Move on after a correct guess has been shown."""
        return self._next_question(state)

    def _next_question(self, state: SessionState) -> ActionResult:
        """Advance to the next question, or end the game from the last one."""
        if state.is_last_question:
            new_state = state._copy_with(phase=GamePhase.GAME_OVER)
            return ActionResult.success_with_state(
                new_state,
                changes=[f"Game over with score {state.score}"],
                question_changed=True,
            )

        base = self.config.base_reveal_percentage
        new_state = state._copy_with(
            phase=GamePhase.PLAYING,
            current_question_index=state.current_question_index + 1,
            reveal_percentage=base,
            revealed_cells=generate_reveal(state.grid_size, base, self.rng),
            wrong_attempts=0,
            guess_history=(),
            question_started_at=state.elapsed_seconds,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Question {new_state.current_question_index + 1}/{state.test.question_count}"],
            question_changed=True,
        )

    def _handle_restart(self, state: SessionState, action: Action) -> ActionResult:
        """Start the same quiz again from the first question."""
        new_state = initial_state(state.test, self.config, self.rng)
        return ActionResult.success_with_state(
            new_state,
            changes=["Restarted"],
            question_changed=True,
        )

    def _handle_tick(self, state: SessionState, action: Action) -> ActionResult:
        """Advance elapsed time by one second."""
        return ActionResult.success_with_state(
            state._copy_with(elapsed_seconds=state.elapsed_seconds + 1)
        )


def apply_action(
    state: SessionState,
    action: Action,
    config: EngineConfig | None = None,
    rng: random.Random | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(config=config or EngineConfig(), rng=rng or random.Random())
    return reducer.apply(state, action)
