"""Data schemas for flashquiz."""

from enum import Enum
from typing import NamedTuple, Tuple

MAX_CHOICES = 4


class QuestionKind(str, Enum):
    PLAIN = "plain"
    MULTIPLE_CHOICE = "mc"


class Question(NamedTuple):
    """One quiz question.

    ``answer`` is the revealed answer text for plain questions and the
    correct choice letter (``A``..``D``, any case) for multiple choice.
    """
    kind: QuestionKind
    prompt: str
    answer: str
    choices: Tuple[str, ...] = ()

    @property
    def is_multiple_choice(self) -> bool:
        return self.kind is QuestionKind.MULTIPLE_CHOICE


class Section(NamedTuple):
    name: str
    questions: Tuple[Question, ...]


class Quiz(NamedTuple):
    title: str
    sections: Tuple[Section, ...]
    source: str = ""
