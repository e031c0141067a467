"""Command-line entry points for flashquiz.

`main` plays and lists quizzes; `validate_quiz` checks quiz files.
"""

from .main import main

__all__ = ["main"]
