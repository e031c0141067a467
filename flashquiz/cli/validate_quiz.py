from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..data.loader import quiz_from_document
from ..selection import SelectionError, questions_from_quiz, validate_selection
from ..utils.validation import SchemaValidationError, validate_quiz_file


def _validate(path: Path) -> int:
    doc = validate_quiz_file(path)
    quiz = quiz_from_document(doc, source=str(path))
    for section in quiz.sections:
        if section.questions:
            validate_selection(section.questions)
    return len(questions_from_quiz(quiz))


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="python -m flashquiz.cli.validate_quiz",
        description=(
            "Validate quiz files (YAML or JSON) before playing them.\n"
            "On failure, prints every problem found with its location."
        ),
    )
    ap.add_argument("quiz_files", nargs="+", help="Path(s) to quiz files")
    args = ap.parse_args(argv)

    status = 0
    for name in args.quiz_files:
        path = Path(name)
        try:
            count = _validate(path)
            print(f"[validate_quiz] OK: {path} ({count} questions)")
        except FileNotFoundError:
            print(f"[validate_quiz] Error: quiz file not found: {path}")
            status = max(status, 1)
        except (SchemaValidationError, SelectionError) as e:
            # Dedicated exit code for content failures to distinguish from other errors
            print(f"[validate_quiz] Validation failed for {path}.")
            print(f"[validate_quiz] {e}")
            status = 4
    return status


if __name__ == "__main__":
    sys.exit(main())
