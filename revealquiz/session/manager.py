"""
Session Manager - Creates and tracks quiz sessions.

LIFECYCLE:
1. Caller loads a quiz (from a catalog, a file, a request body)
2. Caller creates a session -> validated, started, registered
3. During the game: guesses, skips, restarts go to the session
4. Game over -> caller reads the summary and persists what it wants
5. Caller ends the session -> timers stopped, session forgotten

PERSISTENCE RULES:
- Sessions live in memory only
- The engine never writes scores anywhere; that is the caller's job
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import time

from ..config import EngineConfig
from ..engine_core.state import QuizTest
from .game_session import GameSession
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


@dataclass
class SessionEntry:
    """A registered session with its bookkeeping."""
    session: GameSession
    created_at: float


class SessionManager:
    """
    Manages quiz sessions.

    Responsibilities:
    - Create and start sessions
    - Track sessions by ID
    - Tear down ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        scheduler: Scheduler | None = None,
    ):
        self.config = config or EngineConfig()
        self.scheduler = scheduler
        self._sessions: dict[str, SessionEntry] = {}

    def create_session(
        self,
        quiz: QuizTest,
        seed: int | None = None,
    ) -> GameSession:
        """
        Create and start a session.

        Raises QuizValidationError without registering anything if the
        quiz cannot be played.
        """
        session = GameSession(
            quiz,
            config=self.config,
            scheduler=self.scheduler,
            seed=seed,
        )
        session.start()

        self._sessions[session.session_id] = SessionEntry(
            session=session,
            created_at=time.time(),
        )
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        entry = self._sessions.get(session_id)
        return entry.session if entry else None

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and stop its timers.

        Returns False if the session does not exist.
        """
        entry = self._sessions.pop(session_id, None)
        if not entry:
            return False
        entry.session.teardown()
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still in play."""
        return [
            sid for sid, entry in self._sessions.items()
            if entry.session.is_active
        ]

    def list_sessions(self) -> list[str]:
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End finished sessions older than max_age.

        Called periodically to free memory. Returns the number removed.
        """
        current_time = time.time()
        to_remove = [
            sid for sid, entry in self._sessions.items()
            if current_time - entry.created_at > max_age_seconds
            and not entry.session.is_active
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)

    def shutdown(self) -> None:
        """End every session."""
        for session_id in list(self._sessions):
            self.end_session(session_id, reason="shutdown")
