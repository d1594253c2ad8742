"""
Game Session - One play-through of a quiz.

The session owns:
- The canonical SessionState (replaced atomically on every transition)
- A lock serializing guesses, skips, restarts and ticks
- The repeating tick that advances elapsed time
- The deferred advance after a correct guess

Timer lifecycle:
- A fresh tick starts with every question and on restart
- The previous tick is cancelled whenever the question changes,
  the session restarts, the game ends or the session is torn down
- A pending advance is cancelled on restart, skip and teardown

Every scheduled callback carries the generation it was scheduled in,
so a callback that slips past cancellation never touches a newer
question or a closed session.
"""

from __future__ import annotations
from typing import Callable
import logging
import random
import threading
import uuid

from ..config import EngineConfig
from ..engine_core.state import QuizTest, SessionState, GamePhase, GuessOutcome, GameSummary
from ..engine_core.action import Action, ActionResult, ErrorCode
from ..engine_core.reducer import Reducer, initial_state
from ..engine_core.validation import validate_quiz
from .scheduler import Scheduler, ScheduledCall, ThreadingScheduler

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]


class GameSession:
    """
    Session state machine for a single quiz.

    Usage:
        session = GameSession(quiz)
        session.start()

        result = session.submit_guess("paris")
        if not result.success:
            show_error(result.error)

        render(session.snapshot())
    """

    def __init__(
        self,
        quiz: QuizTest,
        config: EngineConfig | None = None,
        scheduler: Scheduler | None = None,
        seed: int | None = None,
        session_id: str | None = None,
    ):
        validate_quiz(quiz, raise_on_error=True)

        self.session_id = session_id or str(uuid.uuid4())
        self.quiz = quiz
        self.config = config or EngineConfig()
        self.scheduler = scheduler or ThreadingScheduler()
        self.seed = seed
        self._reducer = Reducer(config=self.config, rng=random.Random(seed))

        self._lock = threading.RLock()
        self._state = SessionState(test=quiz, grid_size=self.config.grid_size)
        self._generation = 0
        self._closed = False
        self._tick_handle: ScheduledCall | None = None
        self._advance_handle: ScheduledCall | None = None
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> SessionState:
        """Put the first question in play and start the timer."""
        with self._lock:
            if self._closed:
                raise RuntimeError(f"Session {self.session_id} is closed")
            if self._state.phase != GamePhase.LOADING:
                raise RuntimeError(f"Session {self.session_id} already started")

            self._state = initial_state(self.quiz, self.config, self._reducer.rng)
            self._begin_question()
            logger.info(
                "Session %s started: %r, %d question(s)",
                self.session_id, self.quiz.title, self.quiz.question_count,
            )
            self._notify()
            return self._state

    def snapshot(self) -> SessionState:
        """Current state. Read-only; unchanged until the next transition."""
        return self._state

    @property
    def is_active(self) -> bool:
        return not self._closed and self._state.phase != GamePhase.GAME_OVER

    def submit_guess(self, text: str) -> ActionResult:
        """Classify a guess; schedules the advance when it is correct."""
        with self._lock:
            result = self._dispatch(Action.guess(text))
            if result.success and result.outcome == GuessOutcome.CORRECT:
                self._schedule_advance()
            return result

    def skip(self) -> ActionResult:
        """Move to the next question (or end the game) without scoring."""
        return self._dispatch(Action.skip())

    def restart(self) -> ActionResult:
        """Start over from the first question with a fresh timer."""
        result = self._dispatch(Action.restart())
        if result.success:
            logger.info("Session %s restarted", self.session_id)
        return result

    def tick(self) -> ActionResult:
        """Advance elapsed time by one second."""
        return self._dispatch(Action.tick())

    def teardown(self) -> None:
        """Stop all timers. The session accepts no further actions."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._cancel_timers()
            self._listeners.clear()
            logger.info("Session %s torn down", self.session_id)

    def summary(self) -> GameSummary:
        return GameSummary.from_state(self._state)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener with the new state after every transition.

        Returns a function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _dispatch(self, action: Action) -> ActionResult:
        """Apply an action under the lock and react to question changes."""
        with self._lock:
            if self._closed:
                return ActionResult.failure(
                    f"Session {self.session_id} is closed", ErrorCode.SESSION_CLOSED
                )

            result = self._reducer.apply(self._state, action)
            if not result.success:
                logger.debug(
                    "Session %s rejected %s: %s",
                    self.session_id, action.action_type.value, result.error,
                )
                return result

            self._state = result.new_state
            if result.question_changed:
                self._begin_question()
            self._notify()
            return result

    def _begin_question(self) -> None:
        """Invalidate old timers and, unless the game is over, start a new tick."""
        self._cancel_timers()
        if self._state.game_over:
            logger.info(
                "Session %s game over: score=%d elapsed=%ds",
                self.session_id, self._state.score, self._state.elapsed_seconds,
            )
            return
        self._schedule_tick()

    def _cancel_timers(self) -> None:
        self._generation += 1
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        if self._advance_handle is not None:
            self._advance_handle.cancel()
            self._advance_handle = None

    def _schedule_tick(self) -> None:
        generation = self._generation
        self._tick_handle = self.scheduler.call_later(
            self.config.tick_interval, lambda: self._on_tick(generation)
        )

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._closed:
                return
            self._tick_handle = None

            result = self._dispatch(Action.tick())
            if not result.success:
                return

            if self._time_limit_reached():
                logger.debug("Session %s: time limit reached, skipping", self.session_id)
                self._dispatch(Action.skip())
                return

            self._schedule_tick()

    def _time_limit_reached(self) -> bool:
        limit = self.config.question_time_limit
        return (
            limit is not None
            and self._state.phase == GamePhase.PLAYING
            and self._state.question_elapsed_seconds >= limit
        )

    def _schedule_advance(self) -> None:
        generation = self._generation
        self._advance_handle = self.scheduler.call_later(
            self.config.advance_delay, lambda: self._on_advance(generation)
        )

    def _on_advance(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._closed:
                return
            self._advance_handle = None
            self._dispatch(Action.advance())

    def _notify(self) -> None:
        """Deliver the new state; a failing listener never interrupts the transition."""
        state = self._state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Session %s: listener %r failed", self.session_id, listener)
