"""Question selection: turns loaded quizzes into the question list of one run.

Validation of multiple-choice questions happens here, before a QuizState is
ever built over them; the state machine trusts it.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import List, Optional

from .data.schemas import MAX_CHOICES, Question, Quiz, Section
from .quiz.grading import answer_to_index
from .quiz.shuffle import DEFAULT_MAX_ATTEMPTS, shuffle_suffix
from .quiz.state import QuizState
from .utils.validation import ValidationError

logger = logging.getLogger(__name__)


class SelectionError(ValidationError):
    """Raised when a selection cannot be played."""
    pass


def questions_from_section(section: Section) -> List[Question]:
    return list(section.questions)


def questions_from_quiz(quiz: Quiz) -> List[Question]:
    """Merge all sections of ``quiz`` into one question list."""
    return [q for section in quiz.sections for q in section.questions]


def questions_from_all(quizzes: Sequence[Quiz]) -> List[Question]:
    """Merge every section of every quiz into one question list."""
    return [q for quiz in quizzes for q in questions_from_quiz(quiz)]


def repeat_questions(questions: Sequence[Question], times: int) -> List[Question]:
    if times < 1:
        raise ValueError(f"repeat must be at least 1, got {times}")
    return list(questions) * times


def validate_selection(questions: Sequence[Question]) -> None:
    """Check that ``questions`` can be played.

    Raises:
        SelectionError: On an empty selection, or a multiple-choice question
            with too many choices or an answer letter outside its choices
    """
    if len(questions) == 0:
        raise SelectionError("There are no questions in this selection")

    for question in questions:
        if not question.is_multiple_choice:
            continue
        if len(question.choices) > MAX_CHOICES:
            raise SelectionError(
                f"Multiple Choice question: '{question.prompt}' exceeds maximum options length of {MAX_CHOICES}"
            )
        if answer_to_index(question.answer, len(question.choices)) is None:
            raise SelectionError(f"Multiple Choice question: '{question.prompt}' has an invalid answer")


def build_quiz_state(
    questions: Sequence[Question],
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> QuizState:
    """Validate a selection and build its initial QuizState.

    With ``shuffle`` the whole visiting order is randomized, keeping
    duplicate questions apart where possible.
    """
    try:
        validate_selection(questions)
    except SelectionError as e:
        logger.warning("Rejected selection: %s", e)
        raise

    order = None
    if shuffle:
        order = shuffle_suffix(range(len(questions)), 0, questions, rng, max_attempts).order
    state = QuizState.start(questions, order=order)
    logger.info("Starting quiz run with %d questions (shuffle=%s)", len(questions), shuffle)
    return state
