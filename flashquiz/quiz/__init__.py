"""Quiz progression: state snapshots, grading and shuffling."""

from .grading import Evaluation, Score, answer_to_index, grade_choice
from .shuffle import ShuffleResult, has_adjacent_duplicates, shuffle_suffix
from .state import QuizState

__all__ = [
    "Evaluation",
    "Score",
    "answer_to_index",
    "grade_choice",
    "ShuffleResult",
    "has_adjacent_duplicates",
    "shuffle_suffix",
    "QuizState",
]
