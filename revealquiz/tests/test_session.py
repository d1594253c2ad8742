"""
Tests for the game session state machine and its timers.

A ManualScheduler stands in for wall-clock time: ticks and the delayed
advance only run when the test moves the clock.
"""

import pytest

from ..config import EngineConfig
from ..engine_core.state import GamePhase, GuessOutcome
from ..engine_core.action import ErrorCode
from ..engine_core.validation import QuizValidationError
from ..session import GameSession, ManualScheduler


class TestStart:

    def test_start_initializes(self, session):
        state = session.snapshot()
        assert state.phase == GamePhase.PLAYING
        assert state.current_question_index == 0
        assert state.reveal_percentage == 30
        assert state.score == 0
        assert state.elapsed_seconds == 0

    def test_empty_quiz_rejected(self, empty_quiz, scheduler):
        with pytest.raises(QuizValidationError):
            GameSession(empty_quiz, scheduler=scheduler)
        assert scheduler.pending == 0

    def test_start_twice(self, session):
        with pytest.raises(RuntimeError):
            session.start()

    def test_actions_before_start(self, two_question_quiz, scheduler):
        session = GameSession(two_question_quiz, scheduler=scheduler)
        result = session.submit_guess("paris")

        assert not result.success
        assert result.error_code == ErrorCode.NOT_STARTED

    def test_seeded_sessions_reveal_same_cells(self, two_question_quiz):
        first = GameSession(two_question_quiz, scheduler=ManualScheduler(), seed=3)
        second = GameSession(two_question_quiz, scheduler=ManualScheduler(), seed=3)
        assert first.start().revealed_cells == second.start().revealed_cells


class TestTimer:
    """Tests for the elapsed-time tick."""

    def test_ticks_advance_elapsed(self, session, scheduler):
        scheduler.advance(3)
        assert session.snapshot().elapsed_seconds == 3

    def test_elapsed_survives_question_change(self, session, scheduler):
        scheduler.advance(2)
        session.skip()
        scheduler.advance(2)

        state = session.snapshot()
        assert state.current_question_index == 1
        assert state.elapsed_seconds == 4

    def test_one_timer_after_question_change(self, session, scheduler):
        session.skip()
        assert scheduler.pending == 1

    def test_ticks_stop_at_game_over(self, session, scheduler):
        scheduler.advance(1)
        session.skip()
        session.skip()

        assert session.snapshot().game_over
        assert scheduler.pending == 0
        scheduler.advance(10)
        assert session.snapshot().elapsed_seconds == 1

    def test_tick_rejected_after_game_over(self, session):
        session.skip()
        session.skip()
        result = session.tick()

        assert not result.success
        assert result.error_code == ErrorCode.GAME_OVER


class TestGuessing:

    def test_wrong_guess(self, session):
        result = session.submit_guess("london")

        assert result.outcome == GuessOutcome.WRONG
        state = session.snapshot()
        assert state.reveal_percentage == 37
        assert state.wrong_attempts == 1

    def test_blank_guess_no_history(self, session):
        before = session.snapshot()
        result = session.submit_guess("  ")

        assert not result.success
        assert result.error_code == ErrorCode.EMPTY_GUESS
        assert session.snapshot() is before

    def test_correct_guess_advances_after_delay(self, session, scheduler):
        session.submit_guess("paris")
        assert session.snapshot().phase == GamePhase.REVEALING

        scheduler.advance(0.5)
        assert session.snapshot().current_question_index == 0

        scheduler.advance(0.5)
        state = session.snapshot()
        assert state.current_question_index == 1
        assert state.phase == GamePhase.PLAYING

    def test_correct_on_last_question_ends_game(self, session, scheduler):
        session.skip()
        session.submit_guess("Roma")
        scheduler.advance(1)

        state = session.snapshot()
        assert state.game_over
        assert state.score == 700
        assert scheduler.pending == 0

    def test_skip_cancels_pending_advance(self, three_question_quiz, scheduler):
        session = GameSession(three_question_quiz, scheduler=scheduler)
        session.start()
        session.submit_guess("paris")
        session.skip()
        scheduler.advance(1)

        # The skip moved to q2; the cancelled advance must not move to q3
        assert session.snapshot().current_question_index == 1
        session.teardown()


class TestRestart:

    def test_restart_resets_everything(self, session, scheduler):
        scheduler.advance(4)
        session.submit_guess("lyon")
        session.skip()
        session.submit_guess("rome")

        result = session.restart()

        assert result.success
        state = session.snapshot()
        assert state.current_question_index == 0
        assert state.score == 0
        assert state.elapsed_seconds == 0
        assert state.reveal_percentage == 30
        assert state.wrong_attempts == 0
        assert state.guess_history == ()
        assert not state.game_over

    def test_restart_replaces_timer(self, session, scheduler):
        scheduler.advance(2)
        session.restart()

        assert scheduler.pending == 1
        scheduler.advance(3)
        assert session.snapshot().elapsed_seconds == 3

    def test_restart_during_pending_advance(self, session, scheduler):
        session.submit_guess("paris")
        session.restart()
        scheduler.advance(1)

        state = session.snapshot()
        assert state.current_question_index == 0
        assert state.phase == GamePhase.PLAYING
        assert state.score == 0
        assert state.elapsed_seconds == 1

    def test_restart_after_game_over(self, session, scheduler):
        session.skip()
        session.skip()
        session.restart()

        assert not session.snapshot().game_over
        scheduler.advance(2)
        assert session.snapshot().elapsed_seconds == 2


class TestTeardown:

    def test_teardown_cancels_timers(self, session, scheduler):
        session.submit_guess("paris")
        session.teardown()

        assert scheduler.pending == 0
        scheduler.advance(5)
        state = session.snapshot()
        assert state.phase == GamePhase.REVEALING
        assert state.elapsed_seconds == 0

    def test_actions_after_teardown(self, session):
        session.teardown()
        result = session.skip()

        assert not result.success
        assert result.error_code == ErrorCode.SESSION_CLOSED
        assert not session.is_active


class TestSnapshot:

    def test_repeated_snapshots_identical(self, session):
        first = session.snapshot()
        second = session.snapshot()
        assert first is second
        assert first == second

    def test_snapshot_changes_after_transition(self, session):
        before = session.snapshot()
        session.submit_guess("lyon")
        assert session.snapshot() != before

    def test_listeners_see_transitions(self, session, scheduler):
        seen = []
        unsubscribe = session.subscribe(seen.append)

        session.submit_guess("lyon")
        scheduler.advance(1)
        assert [s.wrong_attempts for s in seen] == [1, 1]
        assert seen[-1].elapsed_seconds == 1

        unsubscribe()
        session.skip()
        assert len(seen) == 2

    def test_failing_listener_keeps_advance(self, session, scheduler):
        def broken(state):
            raise RuntimeError("render failed")

        session.subscribe(broken)
        result = session.submit_guess("paris")

        assert result.success
        assert scheduler.pending == 2  # Tick and deferred advance
        scheduler.advance(1)
        state = session.snapshot()
        assert state.phase == GamePhase.PLAYING
        assert state.current_question_index == 1

    def test_failing_listener_keeps_ticking(self, session, scheduler):
        calls = []

        def fails_once(state):
            calls.append(state.elapsed_seconds)
            if len(calls) == 1:
                raise RuntimeError("render failed")

        session.subscribe(fails_once)
        scheduler.advance(6)

        assert session.snapshot().elapsed_seconds == 6
        assert calls == [1, 2, 3, 4, 5, 6]

    def test_other_listeners_still_notified(self, session):
        seen = []

        def broken(state):
            raise RuntimeError("render failed")

        session.subscribe(broken)
        session.subscribe(seen.append)
        session.submit_guess("lyon")

        assert len(seen) == 1
        assert seen[0].wrong_attempts == 1


class TestTimeLimit:
    """Tests for the optional per-question time limit."""

    @pytest.fixture
    def limited_session(self, two_question_quiz, scheduler):
        config = EngineConfig(question_time_limit=3, advance_delay=5)
        session = GameSession(two_question_quiz, config=config, scheduler=scheduler)
        session.start()
        yield session
        session.teardown()

    def test_auto_skip(self, limited_session, scheduler):
        scheduler.advance(3)

        state = limited_session.snapshot()
        assert state.current_question_index == 1
        assert state.skipped_count == 1
        assert state.elapsed_seconds == 3

    def test_limit_is_per_question(self, limited_session, scheduler):
        scheduler.advance(3)
        scheduler.advance(2)
        assert limited_session.snapshot().current_question_index == 1

        scheduler.advance(1)
        assert limited_session.snapshot().game_over
        assert scheduler.pending == 0

    def test_no_skip_while_showing_correct_answer(self, limited_session, scheduler):
        limited_session.submit_guess("paris")
        scheduler.advance(4)

        state = limited_session.snapshot()
        assert state.phase == GamePhase.REVEALING
        assert state.skipped_count == 0

        scheduler.advance(1)
        assert limited_session.snapshot().current_question_index == 1
