"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the mobile app and the engine.
Accepted answers are only ever sent TO the server; responses never
include them.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_QUIZ: Quiz has no questions or a question has no answers
- GAME_OVER: Action other than restart sent after the game ended
- EMPTY_GUESS: Guess was blank after trimming
- ADVANCE_PENDING: Guess sent while a correct answer is being shown
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    LOADING = "loading"
    PLAYING = "playing"
    REVEALING = "revealing"
    GAME_OVER = "game_over"


class GuessOutcome(str, Enum):
    """Guess classification."""
    CORRECT = "correct"
    CLOSE = "close"
    WRONG = "wrong"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_QUIZ = "INVALID_QUIZ"
    GAME_OVER = "GAME_OVER"
    EMPTY_GUESS = "EMPTY_GUESS"
    ADVANCE_PENDING = "ADVANCE_PENDING"
    NO_PENDING_ADVANCE = "NO_PENDING_ADVANCE"
    NOT_STARTED = "NOT_STARTED"
    SESSION_CLOSED = "SESSION_CLOSED"
    NO_HANDLER = "NO_HANDLER"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class QuestionIn(BaseModel):
    """A question as supplied by the quiz catalog."""
    id: str
    image_url: str = ""
    prompt: str = ""
    answers: list[str] = Field(default_factory=list, description="Accepted answers")


class QuizIn(BaseModel):
    """A quiz as supplied by the quiz catalog."""
    id: str
    title: str = ""
    questions: list[QuestionIn] = Field(default_factory=list)


class CreateSessionRequest(BaseModel):
    """Start playing a quiz."""
    quiz: QuizIn
    seed: Optional[int] = Field(None, description="Seed for reproducible reveal order")


class GuessRequest(BaseModel):
    """A free-text guess."""
    text: str = Field(description="Raw guess; trimmed and lower-cased by the engine")


# =============================================================================
# Response Models
# =============================================================================

class QuestionInfo(BaseModel):
    """The question in play, without its answers."""
    question_id: str
    index: int
    count: int
    image_url: str
    prompt: str = ""


class GuessRecordInfo(BaseModel):
    """One entry of the guess history."""
    text: str
    outcome: GuessOutcome


class SessionResponse(BaseModel):
    """Full session snapshot for rendering."""
    session_id: str
    test_id: str
    title: str = ""
    status: SessionStatus
    game_over: bool = False
    question: Optional[QuestionInfo] = None
    score: int = 0
    reveal_percentage: int = 0
    visible_percentage: int = 0
    grid_size: int = 4
    revealed_cells: list[int] = Field(default_factory=list)
    wrong_attempts: int = 0
    guess_history: list[GuessRecordInfo] = Field(
        default_factory=list, description="Most recent first"
    )
    elapsed_seconds: int = 0


class GuessResponse(BaseModel):
    """Result of a guess."""
    outcome: GuessOutcome
    points_awarded: int = 0
    session: SessionResponse


class SummaryResponse(BaseModel):
    """End-of-game statistics."""
    session_id: str
    score: int
    completion_time: int = Field(description="Elapsed seconds")
    attempts_count: int
    correct_count: int
    skipped_count: int
    question_count: int
    is_success: bool
    game_over: bool


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    active_sessions: int = 0


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
