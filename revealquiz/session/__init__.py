"""
Session Module - Manages ephemeral quiz sessions.

A session represents one play-through of a quiz:
- Created when the player starts a quiz
- Holds the current SessionState
- Owns the tick timer and the delayed advance after a correct guess
- Torn down when the player exits

Sessions are EPHEMERAL:
- No persistence
- No state survives a process restart
"""

from .game_session import GameSession
from .manager import SessionManager, SessionEntry
from .scheduler import (
    Scheduler, ScheduledCall, AsyncioScheduler, ThreadingScheduler, ManualScheduler,
)

__all__ = [
    "GameSession",
    "SessionManager",
    "SessionEntry",
    "Scheduler",
    "ScheduledCall",
    "AsyncioScheduler",
    "ThreadingScheduler",
    "ManualScheduler",
]
