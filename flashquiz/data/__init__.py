"""Data handling modules for flashquiz."""

from .schemas import Question, QuestionKind, Quiz, Section
from .loader import load_quiz, load_quizzes

__all__ = [
    "Question",
    "QuestionKind",
    "Quiz",
    "Section",
    "load_quiz",
    "load_quizzes",
]
