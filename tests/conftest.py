from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flashquiz.data.schemas import Question, QuestionKind  # noqa: E402


# ====================
# Logging isolation
# ====================

@pytest.fixture(autouse=True)
def reset_flashquiz_logger():
    """Let every test configure logging from scratch."""
    yield
    logger = logging.getLogger("flashquiz")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    if hasattr(logger, "_configured"):
        del logger._configured


# ====================
# Question fixtures
# ====================

def plain(prompt: str, answer: str = "answer") -> Question:
    return Question(kind=QuestionKind.PLAIN, prompt=prompt, answer=answer)


def mc(prompt: str, choices, answer: str) -> Question:
    return Question(kind=QuestionKind.MULTIPLE_CHOICE, prompt=prompt, answer=answer, choices=tuple(choices))


@pytest.fixture
def plain_questions():
    return [plain(f"Question {i}?", f"Answer {i}") for i in range(5)]


@pytest.fixture
def paris_question():
    return mc("Capital of France?", ["Paris", "Lyon", "Nice"], "a")


@pytest.fixture
def mixed_questions(paris_question):
    return [
        plain("What is 2 + 2?", "4"),
        paris_question,
        mc("Largest planet?", ["Mars", "Venus", "Jupiter", "Earth"], "C"),
        plain("Chemical symbol for gold?", "Au"),
    ]


# ====================
# Quiz file fixtures
# ====================

@pytest.fixture
def quiz_document():
    return {
        "title": "Geography",
        "sections": [
            {
                "name": "Basics",
                "questions": [
                    {"q": "Capital of France?", "a": "Paris"},
                    {"type": "plain", "q": "Capital of Peru?", "a": "Lima"},
                ],
            },
            {
                "name": "Choices",
                "questions": [
                    {"type": "mc", "q": "Capital of Italy?", "choices": ["Milan", "Rome", "Turin"], "a": "B"},
                ],
            },
        ],
    }


@pytest.fixture
def quiz_dir(tmp_path, quiz_document):
    """A directory with one YAML and one JSON quiz file."""
    d = tmp_path / "quizzes"
    d.mkdir()
    with open(d / "a_geography.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump(quiz_document, f)
    science = {
        "title": "Science",
        "sections": [
            {"name": "Chemistry", "questions": [{"q": "Symbol for gold?", "a": "Au"}]},
        ],
    }
    (d / "b_science.json").write_text(json.dumps(science), encoding="utf-8")
    (d / "notes.txt").write_text("not a quiz", encoding="utf-8")
    return d


@pytest.fixture
def config_file(tmp_path):
    """Config that keeps log files inside the test's temp dir."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "logging": {"level": "DEBUG", "log_dir": str(tmp_path / "logs"), "filename": "test.log"},
                "determinism": {"seed": 11},
                "quiz": {"shuffle": False, "repeat": 1},
            }
        ),
        encoding="utf-8",
    )
    return path


def scripted_input(lines):
    """input() replacement that replays ``lines`` and then signals end of input."""
    it = iter(lines)

    def _input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    return _input
