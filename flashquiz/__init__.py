"""flashquiz package.

Terminal quiz and flashcard runner built around an immutable quiz
progression state machine.
"""

from .config import AppConfig, default_app_config
from .data import Question, QuestionKind, Quiz, Section, load_quiz, load_quizzes
from .quiz import Evaluation, QuizState, Score, shuffle_suffix
from .selection import SelectionError, build_quiz_state, validate_selection
from .utils import set_determinism, setup_logging

__all__ = [
    "__version__",
    "AppConfig",
    "default_app_config",
    "Question",
    "QuestionKind",
    "Quiz",
    "Section",
    "load_quiz",
    "load_quizzes",
    "Evaluation",
    "QuizState",
    "Score",
    "shuffle_suffix",
    "SelectionError",
    "build_quiz_state",
    "validate_selection",
    "setup_logging",
    "set_determinism",
]

__version__ = "0.1.0"
