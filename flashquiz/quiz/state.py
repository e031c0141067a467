"""Immutable quiz progress snapshots.

Every transition returns a new ``QuizState``; the receiver is never changed.
The question list itself is owned by the caller and passed in read-only where
an operation needs to look at the current question.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from ..data.schemas import Question
from .grading import Evaluation, Score, grade_choice
from .shuffle import DEFAULT_MAX_ATTEMPTS, shuffle_suffix


@dataclass(frozen=True)
class QuizState:
    """One snapshot of a quiz run.

    Attributes:
        order: Permutation of question-list indexes, in visiting order
        position: Cursor into ``order``
        evaluations: Question-list index -> YES/NO; missing means unanswered
        showing_answer: Whether the current answer is revealed
        highlight_choice: Set right after a multiple-choice answer is submitted
        focused_choice: Focused option of the current multiple-choice question
    """

    order: Tuple[int, ...]
    position: int = 0
    evaluations: Dict[int, Evaluation] = field(default_factory=dict)
    showing_answer: bool = False
    highlight_choice: bool = False
    focused_choice: int = 0

    @classmethod
    def start(
        cls,
        questions: Sequence[Question],
        order: Optional[Sequence[int]] = None,
        prior: Optional["QuizState"] = None,
    ) -> "QuizState":
        """Build the initial snapshot for ``questions``.

        ``order`` defaults to the identity permutation. A ``prior`` snapshot
        over the same number of questions is resumed instead.
        """
        n = len(questions)
        if n == 0:
            raise ValueError("Cannot start a quiz without questions")
        if prior is not None:
            if len(prior.order) != n:
                raise ValueError(
                    f"Prior state covers {len(prior.order)} questions, expected {n}"
                )
            return prior.copy()
        order = tuple(range(n)) if order is None else tuple(order)
        if sorted(order) != list(range(n)):
            raise ValueError(f"order must be a permutation of range({n}): {order}")
        return cls(order=order)

    def copy(self, **changes) -> "QuizState":
        changes.setdefault("evaluations", dict(self.evaluations))
        return replace(self, **changes)

    def _clean(self, **changes) -> "QuizState":
        return self.copy(showing_answer=False, highlight_choice=False, focused_choice=0, **changes)

    # -- lookups ---------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self.order)

    @property
    def eval_key(self) -> int:
        return self.order[self.position]

    @property
    def is_last(self) -> bool:
        return self.position == self.size - 1

    def current_question(self, questions: Sequence[Question]) -> Question:
        return questions[self.eval_key]

    def current_evaluation(self) -> Evaluation:
        return self.evaluations.get(self.eval_key, Evaluation.UNANSWERED)

    def is_current_answered(self) -> bool:
        return self.eval_key in self.evaluations

    def compute_score(self) -> Score:
        yes = no = unevaluated = 0
        for key in self.order:
            outcome = self.evaluations.get(key, Evaluation.UNANSWERED)
            if outcome is Evaluation.YES:
                yes += 1
            elif outcome is Evaluation.NO:
                no += 1
            else:
                unevaluated += 1
        return Score(yes, no, unevaluated)

    # -- navigation ------------------------------------------------------

    def advance(self) -> "QuizState":
        if self.position < self.size - 1:
            return self._clean(position=self.position + 1)
        return self.copy()

    def retreat(self) -> "QuizState":
        if self.position > 0:
            return self._clean(position=self.position - 1)
        return self.copy()

    def move_choice_focus_up(self, questions: Sequence[Question]) -> "QuizState":
        focused = self.focused_choice
        if self.current_question(questions).is_multiple_choice and focused > 0:
            focused -= 1
        return self.copy(showing_answer=False, highlight_choice=False, focused_choice=focused)

    def move_choice_focus_down(self, questions: Sequence[Question]) -> "QuizState":
        question = self.current_question(questions)
        focused = self.focused_choice
        if question.is_multiple_choice and focused < len(question.choices) - 1:
            focused += 1
        return self.copy(showing_answer=False, highlight_choice=False, focused_choice=focused)

    def toggle_answer_visibility(self) -> "QuizState":
        return self.copy(showing_answer=not self.showing_answer)

    # -- evaluation ------------------------------------------------------

    def mark_self_evaluation(self, outcome: Evaluation) -> "QuizState":
        outcome = Evaluation(outcome)
        if outcome is Evaluation.UNANSWERED:
            raise ValueError("Only YES or NO can be recorded")
        evaluations = dict(self.evaluations)
        evaluations[self.eval_key] = outcome
        return self.copy(evaluations=evaluations)

    def submit_choice(self, question: Question) -> "QuizState":
        """Grade the focused option of ``question`` (the current question).

        A ``question.answer`` letter outside its choices is a contract
        violation upstream; it grades every submission as NO.
        """
        if not question.is_multiple_choice:
            return self.copy()
        evaluations = dict(self.evaluations)
        evaluations[self.eval_key] = grade_choice(question, self.focused_choice)
        return self.copy(highlight_choice=not self.highlight_choice, evaluations=evaluations)

    # -- shuffling -------------------------------------------------------

    def shuffle(
        self,
        questions: Sequence[Question],
        rng: Optional[random.Random] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> "QuizState":
        """Reshuffle the questions after the current position."""
        result = shuffle_suffix(self.order, self.position + 1, questions, rng, max_attempts)
        return self.copy(order=result.order)
