"""Quiz file loading utilities for flashquiz."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from .schemas import Question, QuestionKind, Quiz, Section
from ..utils.io import DOCUMENT_SUFFIXES
from ..utils.validation import validate_quiz_file

logger = logging.getLogger(__name__)


def _to_text(value: Any) -> str:
    return str(value).strip()


def _question_from_row(row: Dict[str, Any]) -> Question:
    kind = QuestionKind(row.get("type", QuestionKind.PLAIN.value))
    choices = tuple(_to_text(c) for c in row.get("choices") or ()) if kind is QuestionKind.MULTIPLE_CHOICE else ()
    return Question(
        kind=kind,
        prompt=_to_text(row["q"]),
        answer=_to_text(row["a"]),
        choices=choices,
    )


def quiz_from_document(doc: Dict[str, Any], source: str = "") -> Quiz:
    """Build a Quiz from an already validated quiz document."""
    sections = tuple(
        Section(
            name=_to_text(section["name"]),
            questions=tuple(_question_from_row(row) for row in section["questions"]),
        )
        for section in doc["sections"]
    )
    return Quiz(title=_to_text(doc["title"]), sections=sections, source=source)


def load_quiz(path: Union[str, Path]) -> Quiz:
    """Load a quiz from a YAML or JSON file.

    Args:
        path: Path to the quiz file

    Returns:
        Quiz with its sections and questions

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the path is not a quiz file
        SchemaValidationError: If the file content is malformed
    """
    filepath = Path(path).resolve()
    if not filepath.exists():
        raise FileNotFoundError(f"Quiz file not found: {filepath}")
    if not filepath.is_file():
        raise ValueError(f"Path is not a file: {filepath}")
    if filepath.suffix not in DOCUMENT_SUFFIXES:
        raise ValueError(f"Expected .yaml, .yml or .json file, got: {filepath.suffix}")

    doc = validate_quiz_file(filepath)
    quiz = quiz_from_document(doc, source=str(filepath))
    logger.info(
        "Loaded quiz '%s' (%d sections, %d questions) from %s",
        quiz.title,
        len(quiz.sections),
        sum(len(s.questions) for s in quiz.sections),
        filepath,
    )
    return quiz


def find_quiz_files(directory: Union[str, Path]) -> List[Path]:
    root = Path(directory)
    return sorted(p for p in root.iterdir() if p.is_file() and p.suffix in DOCUMENT_SUFFIXES)


def load_quizzes(paths: Union[str, Path, Iterable[Union[str, Path]]]) -> List[Quiz]:
    """Load quizzes from a directory, a single file, or a list of files.

    Raises:
        FileNotFoundError: If a path doesn't exist
        ValueError: If no quiz files are found
    """
    if isinstance(paths, (str, Path)):
        p = Path(paths)
        if not p.exists():
            raise FileNotFoundError(f"Quiz path not found: {p}")
        files = find_quiz_files(p) if p.is_dir() else [p]
    else:
        files = [Path(p) for p in paths]

    if not files:
        raise ValueError(f"No quiz files (.yaml, .yml, .json) found in {paths}")
    return [load_quiz(f) for f in files]
