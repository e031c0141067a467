from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from flashquiz.cli.session import QuizSession
from flashquiz.config import AppConfig
from flashquiz.data.loader import load_quizzes
from flashquiz.data.schemas import Question, Quiz
from flashquiz.selection import (
    SelectionError,
    build_quiz_state,
    questions_from_all,
    questions_from_quiz,
    questions_from_section,
    repeat_questions,
)
from flashquiz.utils.determinism import set_determinism
from flashquiz.utils.logging import setup_logging
from flashquiz.utils.validation import SchemaValidationError, ValidationError


def select_questions(quizzes: List[Quiz], quiz_index: Optional[int], section_index: Optional[int]) -> List[Question]:
    """Pick the questions of one run, numbered as ``flashquiz list`` prints them.

    Quizzes and sections are 1-based; 0 (or leaving the option out) merges
    everything at that level.

    Raises:
        SelectionError: If an index is out of range
    """
    if not quiz_index:
        if section_index:
            raise SelectionError("--section requires --quiz")
        return questions_from_all(quizzes)

    if not 1 <= quiz_index <= len(quizzes):
        raise SelectionError(f"Quiz {quiz_index} does not exist (0-{len(quizzes)})")
    quiz = quizzes[quiz_index - 1]
    if not section_index:
        return questions_from_quiz(quiz)

    if not 1 <= section_index <= len(quiz.sections):
        raise SelectionError(f"Section {section_index} does not exist in '{quiz.title}' (0-{len(quiz.sections)})")
    return questions_from_section(quiz.sections[section_index - 1])


def describe_quizzes(quizzes: List[Quiz]) -> List[str]:
    lines = ["0. Merge all quizzes into a single quiz"]
    for i, quiz in enumerate(quizzes, start=1):
        lines.append(f"{i}. {quiz.title}")
        lines.append(f"   0. Merge all sections from '{quiz.title}' into a single quiz")
        for j, section in enumerate(quiz.sections, start=1):
            lines.append(f"   {j}. {section.name} ({len(section.questions)} questions)")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flashquiz",
        description="flashquiz - terminal quiz and flashcard runner",
        epilog="""Examples:
  # List quizzes and sections found in a directory
  flashquiz list quizzes/

  # Play every quiz in a directory, shuffled
  flashquiz run quizzes/ --shuffle

  # Play section 2 of quiz 1, each question three times
  flashquiz run quizzes/ --quiz 1 --section 2 --repeat 3 --shuffle
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", "-c", default="configs/default.json", help="Configuration file path, JSON or YAML (default: configs/default.json)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List quizzes and their sections")
    list_parser.add_argument("path", nargs="?", help="Quiz file or directory (default: quiz_dir from config)")

    run_parser = subparsers.add_parser("run", help="Play a quiz in the terminal")
    run_parser.add_argument("path", nargs="?", help="Quiz file or directory (default: quiz_dir from config)")
    run_parser.add_argument("--quiz", type=int, help="Quiz number from `list`; 0 or omitted merges all quizzes")
    run_parser.add_argument("--section", type=int, help="Section number from `list`; 0 or omitted merges all sections of the quiz")
    run_parser.add_argument("--shuffle", action="store_true", default=None, help="Shuffle the question order")
    run_parser.add_argument("--repeat", type=int, help="Repeat every question N times")
    run_parser.add_argument("--seed", type=int, help="Seed for a reproducible order")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config_path = Path(args.config)
    try:
        cfg = AppConfig.from_file(config_path) if config_path.exists() else AppConfig()
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"Error: Invalid format in '{config_path}': {e}")
        return 1
    except ValidationError as e:
        print(f"Error: Invalid configuration in '{config_path}': {e}")
        return 1
    logger = setup_logging(cfg.logging.log_dir, cfg.logging.filename, cfg.logging.level)
    if not config_path.exists():
        logger.info("Config file '%s' not found, using defaults", config_path)

    path = args.path or cfg.quiz.quiz_dir
    try:
        quizzes = load_quizzes(path)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        logger.error("FileNotFoundError: %s", e)
        return 1
    except SchemaValidationError as e:
        print(f"Error: {e}")
        logger.error("SchemaValidationError while loading '%s': %s", path, e)
        return 4
    except ValueError as e:
        print(f"Error: {e}")
        logger.error("ValueError while loading '%s': %s", path, e)
        return 1

    if args.command == "list":
        for line in describe_quizzes(quizzes):
            print(line)
        return 0

    seed = args.seed if args.seed is not None else cfg.determinism.seed
    rng = set_determinism(seed, cfg.determinism.python_hash_seed)
    shuffle = cfg.quiz.shuffle if args.shuffle is None else args.shuffle
    repeat = args.repeat if args.repeat is not None else cfg.quiz.repeat

    try:
        questions = select_questions(quizzes, args.quiz, args.section)
        questions = repeat_questions(questions, repeat)
        state = build_quiz_state(questions, shuffle=shuffle, rng=rng, max_attempts=cfg.quiz.shuffle_max_attempts)
    except (SelectionError, ValueError) as e:
        print(f"Error: {e}")
        logger.error("Invalid selection: %s", e)
        return 1

    session = QuizSession(questions, state, rng=rng, shuffle_max_attempts=cfg.quiz.shuffle_max_attempts)
    try:
        session.run()
    except KeyboardInterrupt:
        print()
        logger.info("Quiz run interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
