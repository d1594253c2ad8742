"""
FastAPI Application - REST API for the mobile app.

Endpoints:
    GET    /api/v1/health                       Service health
    POST   /api/v1/sessions                     Start playing a quiz
    GET    /api/v1/sessions                     List active sessions
    GET    /api/v1/sessions/{id}                Get session snapshot
    DELETE /api/v1/sessions/{id}                End session
    POST   /api/v1/sessions/{id}/guess          Submit a guess
    POST   /api/v1/sessions/{id}/skip           Skip the current question
    POST   /api/v1/sessions/{id}/restart        Start the quiz over
    GET    /api/v1/sessions/{id}/summary        End-of-game statistics

Session timers (elapsed seconds, delayed advance after a correct guess)
run on the server's event loop; clients poll the snapshot.
"""

from contextlib import asynccontextmanager
from typing import Annotated, Union
import logging
import os

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import EngineConfig
from ..engine_core.validation import QuizValidationError
from ..session import SessionManager, AsyncioScheduler
from .service import APIService
from .schemas import (
    CreateSessionRequest,
    GuessRequest,
    SessionResponse,
    GuessResponse,
    SummaryResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    ErrorCode,
)

logger = logging.getLogger(__name__)

# Environment configuration
REVEALQUIZ_ENV = os.getenv("REVEALQUIZ_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service: APIService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    api_service = service or APIService(
        session_manager=SessionManager(
            config=EngineConfig.from_env(),
            scheduler=AsyncioScheduler(),
        )
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        api_service.session_manager.shutdown()

    app = FastAPI(
        title="RevealQuiz Engine API",
        description="""
Progressive-reveal guessing game engine.

## Play Flow

1. `POST /sessions` with the quiz (questions and accepted answers)
2. Render `revealed_cells` of the `grid_size` x `grid_size` overlay
3. `POST /guess` for each guess:
   - `correct`: points awarded, next question follows after a short delay
   - `close` / `wrong`: more of the image is revealed
4. `status == "game_over"`: read `/summary` and persist it

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_QUIZ` | Quiz cannot be played |
| `GAME_OVER` | Only restart is allowed after the game ends |
| `EMPTY_GUESS` | Guess was blank |
| `ADVANCE_PENDING` | Correct answer is being shown |
        """,
        version=__version__,
        docs_url=None if REVEALQUIZ_ENV == "production" else "/api/docs",
        redoc_url=None if REVEALQUIZ_ENV == "production" else "/api/redoc",
        lifespan=lifespan,
    )

    # CORS for mobile app
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse, status_code: int | None = None) -> JSONResponse:
        """Create a standardized error response."""
        if status_code is None:
            status_code = 404 if error.error_code == ErrorCode.SESSION_NOT_FOUND else 409
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(
            version=__version__,
            active_sessions=len(api_service.list_sessions()),
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={422: {"model": ErrorResponse, "description": "Quiz cannot be played"}},
        tags=["Sessions"],
        summary="Start playing a quiz",
    )
    async def create_session(body: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Create and start a session for the supplied quiz.

        The quiz needs at least one question, and every question at least
        one accepted answer.
        """
        try:
            return api_service.create_session(body)
        except QuizValidationError as e:
            logger.info("Rejected quiz %r: %s", body.quiz.id, e)
            return make_error_response(
                ErrorResponse(
                    error=str(e),
                    error_code=ErrorCode.INVALID_QUIZ,
                    details={"errors": e.errors},
                ),
                status_code=422,
            )

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session snapshot",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a session and stop its timers."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/guess",
        response_model=GuessResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Session not found"},
            409: {"model": ErrorResponse, "description": "Guess rejected"},
        },
        tags=["Game"],
        summary="Submit a guess",
    )
    async def submit_guess(
        session_id: str,
        body: GuessRequest,
    ) -> Union[GuessResponse, JSONResponse]:
        response = api_service.submit_guess(session_id, body)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/skip",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Skip the current question",
    )
    async def skip(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.skip(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Start the quiz over",
    )
    async def restart(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.restart(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/summary",
        response_model=SummaryResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="End-of-game statistics",
    )
    async def summary(session_id: str) -> Union[SummaryResponse, JSONResponse]:
        response = api_service.get_summary(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    return app


# For running directly: uvicorn revealquiz.api.app:app
app = create_app()
