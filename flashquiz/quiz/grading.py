from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional

from ..data.schemas import Question


class Evaluation(str, Enum):
    YES = "YES"
    NO = "NO"
    UNANSWERED = "UNANSWERED"


class Score(NamedTuple):
    yes: int
    no: int
    unevaluated: int

    @property
    def total(self) -> int:
        return self.yes + self.no + self.unevaluated

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return round(100.0 * self.yes / self.total, 1)

    def as_dict(self) -> dict[str, int]:
        return {"yes": self.yes, "no": self.no, "unevaluated": self.unevaluated}


def choice_label(index: int) -> str:
    return chr(ord("A") + index)


def answer_to_index(answer: str, n_choices: int) -> Optional[int]:
    """Map a choice letter to its 0-based index.

    Returns None when the letter does not name one of the ``n_choices``
    choices; callers treat that as an upstream validation failure.
    """
    label = answer.strip().upper()
    for i in range(n_choices):
        if label == choice_label(i):
            return i
    return None


def grade_choice(question: Question, focused_choice: int) -> Evaluation:
    correct = answer_to_index(question.answer, len(question.choices))
    if correct is not None and focused_choice == correct:
        return Evaluation.YES
    return Evaluation.NO
