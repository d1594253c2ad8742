"""
API Module - Mobile app interface.

Exposes the engine via REST API for mobile consumption.
The mobile app:
1. Loads a quiz from its catalog and starts a session with it
2. Renders the session snapshot (revealed cells, score, history)
3. Submits guesses, skips and restarts
4. Reads the summary at game over and persists it itself

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    GuessRequest,
    QuizIn,
    QuestionIn,
    # Responses
    SessionResponse,
    GuessResponse,
    SummaryResponse,
    ErrorResponse,
    # Shared
    QuestionInfo,
    GuessRecordInfo,
    SessionStatus,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "GuessRequest",
    "QuizIn",
    "QuestionIn",
    # Responses
    "SessionResponse",
    "GuessResponse",
    "SummaryResponse",
    "ErrorResponse",
    # Shared
    "QuestionInfo",
    "GuessRecordInfo",
    "SessionStatus",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
