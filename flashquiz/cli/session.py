"""Line-oriented terminal session over a QuizState.

Each input line maps to one Command, each Command to exactly one QuizState
operation; the resulting snapshot replaces the current one.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from enum import Enum
from typing import List, Optional

from ..data.schemas import Question
from ..quiz.grading import Evaluation, Score, answer_to_index, choice_label
from ..quiz.shuffle import DEFAULT_MAX_ATTEMPTS
from ..quiz.state import QuizState

logger = logging.getLogger(__name__)


class Command(str, Enum):
    NEXT = "next"
    PREV = "prev"
    UP = "up"
    DOWN = "down"
    TOGGLE_ANSWER = "toggle_answer"
    MARK_YES = "yes"
    MARK_NO = "no"
    CHOOSE = "choose"
    SHUFFLE = "shuffle"
    UNDO = "undo"
    QUIT = "quit"


KEYMAP = {
    "l": Command.NEXT,
    "next": Command.NEXT,
    "h": Command.PREV,
    "prev": Command.PREV,
    "k": Command.UP,
    "j": Command.DOWN,
    "a": Command.TOGGLE_ANSWER,
    "y": Command.MARK_YES,
    "n": Command.MARK_NO,
    "": Command.CHOOSE,
    "c": Command.CHOOSE,
    "s": Command.SHUFFLE,
    "u": Command.UNDO,
    "q": Command.QUIT,
}

HELP = "[l]next [h]prev [j/k]move [enter]choose [a]answer [y/n]mark [s]shuffle [u]undo [q]quit"


def parse_command(line: str) -> Optional[Command]:
    return KEYMAP.get(line.strip().lower())


def render_question(state: QuizState, questions: Sequence[Question]) -> str:
    question = state.current_question(questions)
    lines = [f"Question {state.position + 1}/{state.size}", "", question.prompt]

    if question.is_multiple_choice:
        correct = answer_to_index(question.answer, len(question.choices))
        lines.append("")
        for i, choice in enumerate(question.choices):
            cursor = ">" if i == state.focused_choice else " "
            mark = ""
            if state.highlight_choice and i == state.focused_choice:
                mark = "  [correct]" if i == correct else "  [wrong]"
            lines.append(f"{cursor} {choice_label(i)}. {choice}{mark}")

    if state.showing_answer:
        lines += ["", f"Answer: {question.answer}"]

    evaluation = state.current_evaluation()
    if evaluation is not Evaluation.UNANSWERED:
        lines += ["", f"Marked: {evaluation.value}"]
    return "\n".join(lines)


def render_summary(score: Score) -> str:
    return "\n".join(
        [
            "Quiz complete",
            f"  correct:     {score.yes}",
            f"  incorrect:   {score.no}",
            f"  unevaluated: {score.unevaluated}",
            f"  score:       {score.yes}/{score.total} ({score.percentage}%)",
        ]
    )


class QuizSession:
    """Owns the question list and the current snapshot of one run."""

    def __init__(
        self,
        questions: Sequence[Question],
        state: Optional[QuizState] = None,
        rng: Optional[random.Random] = None,
        shuffle_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.questions = tuple(questions)
        self.state = state or QuizState.start(self.questions)
        self.rng = rng
        self.shuffle_max_attempts = shuffle_max_attempts
        self.history: List[QuizState] = []

    @property
    def finished(self) -> bool:
        return self.state.is_last and self.state.is_current_answered()

    def dispatch(self, command: Command) -> QuizState:
        """Apply one command and return the new current snapshot."""
        state, questions = self.state, self.questions
        if command is Command.UNDO:
            if self.history:
                self.state = self.history.pop()
            return self.state
        if command is Command.NEXT:
            new = state.advance()
        elif command is Command.PREV:
            new = state.retreat()
        elif command is Command.UP:
            new = state.move_choice_focus_up(questions)
        elif command is Command.DOWN:
            new = state.move_choice_focus_down(questions)
        elif command is Command.TOGGLE_ANSWER:
            new = state.toggle_answer_visibility()
        elif command is Command.MARK_YES:
            new = state.mark_self_evaluation(Evaluation.YES)
        elif command is Command.MARK_NO:
            new = state.mark_self_evaluation(Evaluation.NO)
        elif command is Command.CHOOSE:
            new = state.submit_choice(state.current_question(questions))
        elif command is Command.SHUFFLE:
            new = state.shuffle(questions, rng=self.rng, max_attempts=self.shuffle_max_attempts)
        else:
            return state

        logger.debug("%s -> position %d", command.value, new.position)
        self.history.append(state)
        self.state = new
        return new

    def run(
        self,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
    ) -> Score:
        """Play until quit, end of input, or the last question is evaluated."""
        input_fn = input_fn or input
        output_fn = output_fn or print
        while True:
            output_fn(render_question(self.state, self.questions))
            if self.finished:
                break
            try:
                line = input_fn(f"{HELP}\n> ")
            except EOFError:
                break
            command = parse_command(line)
            if command is None:
                output_fn(f"Unknown command: {line.strip()!r}")
                continue
            if command is Command.QUIT:
                break
            self.dispatch(command)

        score = self.state.compute_score()
        logger.info("Quiz run ended: %s", score.as_dict())
        output_fn(render_summary(score))
        return score
