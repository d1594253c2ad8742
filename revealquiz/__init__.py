"""
RevealQuiz - Progressive-Reveal Guessing Game Engine

A rules-driven engine for image guessing quizzes. A player is shown a
partially revealed image and types guesses until the subject is named.
The engine provides:
- Reveal grid selection
- Answer normalization and fuzzy matching
- Scoring and difficulty escalation
- Session state machine with cancellable timers
"""

__version__ = "0.1.0"
