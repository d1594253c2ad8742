"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Formats responses for mobile

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.action import ActionResult
from ..engine_core.state import Question, QuizTest, SessionState
from ..session import SessionManager, GameSession
from .schemas import (
    CreateSessionRequest,
    GuessRequest,
    QuizIn,
    SessionResponse,
    GuessResponse,
    SummaryResponse,
    ErrorResponse,
    QuestionInfo,
    GuessRecordInfo,
    SessionStatus,
    GuessOutcome,
    ErrorCode,
)


def quiz_from_request(quiz: QuizIn) -> QuizTest:
    """Convert the request body into engine quiz data."""
    return QuizTest(
        test_id=quiz.id,
        title=quiz.title,
        questions=tuple(
            Question(
                question_id=q.id,
                image_url=q.image_url,
                prompt=q.prompt,
                accepted_answers=tuple(q.answers),
            )
            for q in quiz.questions
        ),
    )


@dataclass
class APIService:
    """
    Main API service for mobile app.

    Usage:
        service = APIService()

        session = service.create_session(request)
        response = service.submit_guess(session.session_id, GuessRequest(text="paris"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create and start a session.

        Raises QuizValidationError if the quiz cannot be played.
        """
        quiz = quiz_from_request(request.quiz)
        session = self.session_manager.create_session(quiz, seed=request.seed)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get current session snapshot."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def submit_guess(self, session_id: str, request: GuessRequest) -> GuessResponse | ErrorResponse:
        """Submit a guess for the current question."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = session.submit_guess(request.text)
        if not result.success:
            return self._action_error(result)

        return GuessResponse(
            outcome=GuessOutcome(result.outcome.value),
            points_awarded=result.points_awarded,
            session=self._session_to_response(session),
        )

    def skip(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = session.skip()
        if not result.success:
            return self._action_error(result)
        return self._session_to_response(session)

    def restart(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = session.restart()
        if not result.success:
            return self._action_error(result)
        return self._session_to_response(session)

    def get_summary(self, session_id: str) -> SummaryResponse | ErrorResponse:
        """Get end-of-game statistics (available at any point of the game)."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        summary = session.summary()
        return SummaryResponse(
            session_id=session_id,
            score=summary.score,
            completion_time=summary.completion_time,
            attempts_count=summary.attempts_count,
            correct_count=summary.correct_count,
            skipped_count=summary.skipped_count,
            question_count=summary.question_count,
            is_success=summary.is_success,
            game_over=session.snapshot().game_over,
        )

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """End a session."""
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _action_error(self, result: ActionResult) -> ErrorResponse:
        code = result.error_code.value if result.error_code else ErrorCode.INTERNAL_ERROR.value
        return ErrorResponse(error=result.error or "Action rejected", error_code=ErrorCode(code))

    def _session_to_response(self, session: GameSession) -> SessionResponse:
        """Convert session snapshot to API response."""
        state = session.snapshot()
        return SessionResponse(
            session_id=session.session_id,
            test_id=state.test.test_id,
            title=state.test.title,
            status=SessionStatus(state.phase.value),
            game_over=state.game_over,
            question=self._question_info(state),
            score=state.score,
            reveal_percentage=state.reveal_percentage,
            visible_percentage=state.visible_percentage,
            grid_size=state.grid_size,
            revealed_cells=sorted(state.revealed_cells),
            wrong_attempts=state.wrong_attempts,
            guess_history=[
                GuessRecordInfo(text=g.text, outcome=GuessOutcome(g.outcome.value))
                for g in state.guess_history
            ],
            elapsed_seconds=state.elapsed_seconds,
        )

    def _question_info(self, state: SessionState) -> QuestionInfo | None:
        if not state.test.questions:
            return None
        question = state.current_question
        return QuestionInfo(
            question_id=question.question_id,
            index=state.current_question_index,
            count=state.test.question_count,
            image_url=question.image_url,
            prompt=question.prompt,
        )
