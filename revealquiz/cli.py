"""
RevealQuiz CLI - Command-line interface for the engine.

Usage:
    revealquiz validate <quiz_file>     Validate a quiz JSON file
    revealquiz play <quiz_file>         Play a quiz in the terminal
    revealquiz serve                    Run the REST API

Quiz file format:
    {"id": "capitals", "title": "Capitals",
     "questions": [{"id": "q1", "image_url": "...", "prompt": "...",
                    "answers": ["paris"]}]}
"""

import argparse
import json
import logging
import sys

from .config import EngineConfig
from .engine_core.state import QuizTest, SessionState, GuessOutcome, GamePhase
from .engine_core.validation import QuizValidationError, validate_quiz

PLAY_COMMANDS = ":skip  :restart  :quit"

OUTCOME_MESSAGES = {
    GuessOutcome.CORRECT: "Correct!",
    GuessOutcome.CLOSE: "Very close! Check your spelling.",
    GuessOutcome.WRONG: "Wrong answer! More of the image is revealed.",
}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="RevealQuiz - Progressive-Reveal Guessing Game Engine",
        prog="revealquiz",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a quiz file")
    validate_parser.add_argument("quiz_file", help="Path to quiz JSON file")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a quiz in the terminal")
    play_parser.add_argument("quiz_file", help="Path to quiz JSON file")
    play_parser.add_argument("--seed", type=int, help="Seed for reproducible reveals")
    play_parser.add_argument("--grid-size", type=int, help="Cells per grid side")
    play_parser.add_argument("--time-limit", type=int, help="Seconds per question")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "validate":
        cmd_validate(args)
    elif args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def load_quiz(path: str) -> QuizTest:
    """Read a quiz JSON file, exiting with a message on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {path}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {path}: {e}")
        sys.exit(1)

    try:
        return QuizTest.from_dict(data)
    except QuizValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_validate(args):
    """Validate a quiz file."""
    quiz = load_quiz(args.quiz_file)
    result = validate_quiz(quiz)

    print(f"Quiz: {quiz.title or quiz.test_id} ({quiz.question_count} question(s))")
    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")

    if result.errors:
        print("\nErrors:")
        for e in result.errors:
            print(f"  - {e}")
        sys.exit(1)

    print("OK")


def render_grid(state: SessionState) -> str:
    """Draw the overlay: '#' hidden, '.' revealed."""
    rows = []
    for row in range(state.grid_size):
        cells = []
        for col in range(state.grid_size):
            index = row * state.grid_size + col
            cells.append("." if index in state.revealed_cells else "#")
        rows.append(" ".join(cells))
    return "\n".join(rows)


def render_question(state: SessionState) -> str:
    question = state.current_question
    lines = [
        "",
        f"Question {state.current_question_index + 1}/{state.test.question_count}"
        f"   Score: {state.score}   Time: {state.elapsed_seconds}s",
        question.prompt or "What is in the picture?",
        f"Image: {question.image_url}",
        render_grid(state),
        f"{state.visible_percentage}% visible",
    ]
    if state.guess_history:
        lines.append("Guesses: " + ", ".join(
            f"{g.text} ({g.outcome.value})" for g in state.guess_history
        ))
    return "\n".join(lines)


def cmd_play(args):
    """Play a quiz interactively."""
    from .session import GameSession, ThreadingScheduler

    quiz = load_quiz(args.quiz_file)
    config = EngineConfig.from_env(
        grid_size=args.grid_size,
        question_time_limit=args.time_limit,
    )

    try:
        session = GameSession(quiz, config=config, scheduler=ThreadingScheduler(), seed=args.seed)
    except QuizValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    last_seen = {"key": None}

    def on_change(state: SessionState):
        # Timers can change the question too (delayed advance, time limit)
        key = (state.current_question_index, state.phase)
        if key == last_seen["key"]:
            return
        last_seen["key"] = key
        if state.game_over:
            print_summary(session)
        elif state.phase == GamePhase.PLAYING:
            print(render_question(state))
            print("> ", end="", flush=True)

    session.subscribe(on_change)
    print(f"{quiz.title or quiz.test_id} - commands: {PLAY_COMMANDS}")
    session.start()

    try:
        while True:
            try:
                line = input()
            except EOFError:
                break

            command = line.strip()
            if command == ":quit":
                break
            elif command == ":restart":
                last_seen["key"] = None
                session.restart()
            elif session.snapshot().game_over:
                print("Game over. Type :restart or :quit.")
            elif command == ":skip":
                session.skip()
            else:
                result = session.submit_guess(line)
                if not result.success:
                    print(result.error)
                elif result.outcome == GuessOutcome.CORRECT:
                    print(f"{OUTCOME_MESSAGES[result.outcome]} +{result.points_awarded} points")
                else:
                    print(OUTCOME_MESSAGES[result.outcome])
                    print(render_question(session.snapshot()))
                    print("> ", end="", flush=True)
    finally:
        session.teardown()


def print_summary(session):
    summary = session.summary()
    print("\nQuiz complete!")
    print(f"Score:    {summary.score}")
    print(f"Correct:  {summary.correct_count}/{summary.question_count}")
    print(f"Attempts: {summary.attempts_count}")
    minutes, seconds = divmod(summary.completion_time, 60)
    print(f"Time:     {minutes:02d}:{seconds:02d}")


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn

    uvicorn.run("revealquiz.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
