"""
Engine configuration.

Defaults match the shipped game: a 4x4 grid starting 30% revealed.
Every field can be overridden from REVEALQUIZ_* environment variables.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
import os

ENV_PREFIX = "REVEALQUIZ_"

# Environment variable suffix -> field name
_ENV_FIELDS = {
    "GRID_SIZE": "grid_size",
    "BASE_REVEAL": "base_reveal_percentage",
    "BASE_SCORE": "base_score",
    "PENALTY_FACTOR": "penalty_factor",
    "FLOOR_SCORE": "floor_score",
    "CLOSE_THRESHOLD": "close_threshold",
    "TICK_INTERVAL": "tick_interval",
    "ADVANCE_DELAY": "advance_delay",
    "QUESTION_TIME_LIMIT": "question_time_limit",
}


@dataclass(frozen=True)
class EngineConfig:
    """Tunable engine constants."""
    grid_size: int = 4
    base_reveal_percentage: int = 30

    # Scoring
    base_score: int = 1000
    penalty_factor: int = 10
    floor_score: int = 100

    # Matching
    close_threshold: int = 2

    # Timing (seconds)
    tick_interval: float = 1.0
    advance_delay: float = 1.0
    question_time_limit: int | None = None  # Auto-skip after this many seconds

    def __post_init__(self):
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be >= 1, got {self.grid_size}")
        if not 0 <= self.base_reveal_percentage <= 100:
            raise ValueError(
                f"base_reveal_percentage must be within 0..100, got {self.base_reveal_percentage}"
            )
        for name in ("base_score", "penalty_factor", "floor_score", "close_threshold"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")
        if self.floor_score > self.base_score:
            raise ValueError("floor_score must not exceed base_score")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        if self.advance_delay < 0:
            raise ValueError("advance_delay must not be negative")
        if self.question_time_limit is not None and self.question_time_limit < 1:
            raise ValueError("question_time_limit must be >= 1 when set")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides) -> EngineConfig:
        """Build a config from REVEALQUIZ_* variables, then explicit overrides."""
        environ = os.environ if environ is None else environ
        types = {f.name: f.type for f in fields(cls)}
        values = {}

        for suffix, name in _ENV_FIELDS.items():
            raw = environ.get(ENV_PREFIX + suffix)
            if raw is None or raw == "":
                continue
            if "float" in types[name]:
                values[name] = float(raw)
            else:
                values[name] = int(raw)

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
