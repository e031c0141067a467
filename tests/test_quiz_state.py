"""Tests for the QuizState snapshot state machine."""

import random

import pytest

from conftest import mc, plain
from flashquiz.quiz.grading import Evaluation, Score
from flashquiz.quiz.state import QuizState


class TestConstruction:
    def test_initial_state(self, plain_questions):
        state = QuizState.start(plain_questions)
        assert state.order == (0, 1, 2, 3, 4)
        assert state.position == 0
        assert state.evaluations == {}
        assert state.showing_answer is False
        assert state.highlight_choice is False
        assert state.focused_choice == 0

    def test_caller_supplied_order(self, plain_questions):
        state = QuizState.start(plain_questions, order=[4, 3, 2, 1, 0])
        assert state.order == (4, 3, 2, 1, 0)
        assert state.current_question(plain_questions) == plain_questions[4]

    @pytest.mark.parametrize("order", [[0, 1, 2, 3], [0, 1, 2, 3, 3], [0, 1, 2, 3, 5]])
    def test_rejects_non_permutation(self, plain_questions, order):
        with pytest.raises(ValueError, match="permutation"):
            QuizState.start(plain_questions, order=order)

    def test_rejects_empty_quiz(self):
        with pytest.raises(ValueError):
            QuizState.start([])

    def test_resume_from_prior(self, plain_questions):
        prior = QuizState.start(plain_questions).advance().mark_self_evaluation(Evaluation.YES)
        resumed = QuizState.start(plain_questions, prior=prior)
        assert resumed == prior
        assert resumed is not prior
        assert resumed.evaluations is not prior.evaluations

    def test_resume_rejects_mismatched_prior(self, plain_questions):
        prior = QuizState.start(plain_questions[:3])
        with pytest.raises(ValueError, match="Prior state"):
            QuizState.start(plain_questions, prior=prior)


class TestNavigation:
    def test_advance_and_retreat(self, plain_questions):
        state = QuizState.start(plain_questions)
        state = state.advance().advance()
        assert state.position == 2
        state = state.retreat()
        assert state.position == 1

    def test_advance_is_noop_at_last_position(self, plain_questions):
        state = QuizState.start(plain_questions)
        for _ in range(10):
            state = state.advance()
        assert state.position == 4
        assert state.is_last

    def test_retreat_is_noop_at_first_position(self, plain_questions):
        state = QuizState.start(plain_questions).toggle_answer_visibility()
        after = state.retreat()
        assert after.position == 0
        # boundary no-op keeps the flags untouched
        assert after.showing_answer is True
        assert after is not state

    @pytest.mark.parametrize("seed", range(10))
    def test_position_stays_in_bounds(self, seed):
        rng = random.Random(seed)
        n = rng.randint(1, 6)
        questions = [plain(f"q{i}") for i in range(n)]
        state = QuizState.start(questions)
        for _ in range(50):
            state = state.advance() if rng.random() < 0.5 else state.retreat()
            assert 0 <= state.position <= n - 1

    @pytest.mark.parametrize("move", ["advance", "retreat"])
    def test_moves_clear_transient_flags(self, mixed_questions, move):
        state = QuizState.start(mixed_questions).advance()
        state = state.move_choice_focus_down(mixed_questions).move_choice_focus_down(mixed_questions)
        state = state.submit_choice(state.current_question(mixed_questions)).toggle_answer_visibility()
        assert (state.showing_answer, state.highlight_choice, state.focused_choice) == (True, True, 2)

        moved = getattr(state, move)()
        assert moved.showing_answer is False
        assert moved.highlight_choice is False
        assert moved.focused_choice == 0

    def test_toggle_answer_visibility(self, plain_questions):
        state = QuizState.start(plain_questions)
        assert state.toggle_answer_visibility().showing_answer is True
        assert state.toggle_answer_visibility().toggle_answer_visibility().showing_answer is False


class TestChoiceFocus:
    def test_focus_clamps_to_choices(self, paris_question):
        questions = [paris_question]
        state = QuizState.start(questions)
        state = state.move_choice_focus_up(questions)
        assert state.focused_choice == 0
        for _ in range(5):
            state = state.move_choice_focus_down(questions)
        assert state.focused_choice == 2
        state = state.move_choice_focus_up(questions)
        assert state.focused_choice == 1

    def test_focus_is_noop_on_plain_question(self, plain_questions):
        state = QuizState.start(plain_questions)
        assert state.move_choice_focus_down(plain_questions).focused_choice == 0

    def test_focus_move_clears_answer_and_highlight(self, paris_question):
        questions = [paris_question]
        state = QuizState.start(questions).submit_choice(paris_question).toggle_answer_visibility()
        moved = state.move_choice_focus_down(questions)
        assert moved.showing_answer is False
        assert moved.highlight_choice is False
        # also at the clamp boundary
        at_top = state.move_choice_focus_up(questions)
        assert at_top.focused_choice == 0
        assert at_top.showing_answer is False
        assert at_top.highlight_choice is False


class TestEvaluation:
    def test_current_evaluation_defaults_to_unanswered(self, plain_questions):
        state = QuizState.start(plain_questions)
        assert state.current_evaluation() is Evaluation.UNANSWERED
        assert state.is_current_answered() is False

    def test_last_write_wins(self, plain_questions):
        state = QuizState.start(plain_questions)
        state = state.mark_self_evaluation(Evaluation.YES).mark_self_evaluation(Evaluation.NO)
        assert state.current_evaluation() is Evaluation.NO
        assert state.is_current_answered() is True

    def test_evaluation_keyed_by_question_index(self, plain_questions):
        state = QuizState.start(plain_questions, order=[3, 1, 4, 0, 2]).advance()
        state = state.mark_self_evaluation(Evaluation.YES)
        assert state.evaluations == {1: Evaluation.YES}

    def test_mark_accepts_string_values(self, plain_questions):
        state = QuizState.start(plain_questions).mark_self_evaluation("NO")
        assert state.current_evaluation() is Evaluation.NO

    def test_mark_unanswered_is_rejected(self, plain_questions):
        with pytest.raises(ValueError):
            QuizState.start(plain_questions).mark_self_evaluation(Evaluation.UNANSWERED)

    def test_submit_choice_correct(self, paris_question):
        state = QuizState.start([paris_question]).submit_choice(paris_question)
        assert state.current_evaluation() is Evaluation.YES
        assert state.highlight_choice is True

    def test_submit_choice_wrong(self, paris_question):
        questions = [paris_question]
        state = QuizState.start(questions).move_choice_focus_down(questions).submit_choice(paris_question)
        assert state.current_evaluation() is Evaluation.NO

    def test_submit_choice_flips_highlight(self, paris_question):
        state = QuizState.start([paris_question]).submit_choice(paris_question).submit_choice(paris_question)
        assert state.highlight_choice is False
        assert state.current_evaluation() is Evaluation.YES

    def test_submit_choice_on_plain_question_is_noop(self, plain_questions):
        state = QuizState.start(plain_questions)
        after = state.submit_choice(plain_questions[0])
        assert after == state
        assert after.is_current_answered() is False

    def test_invalid_answer_letter_always_grades_no(self):
        broken = mc("Broken?", ["x", "y"], "D")
        state = QuizState.start([broken])
        assert state.submit_choice(broken).current_evaluation() is Evaluation.NO
        focused = state.move_choice_focus_down([broken])
        assert focused.submit_choice(broken).current_evaluation() is Evaluation.NO


class TestScore:
    def test_fresh_state_is_all_unevaluated(self, plain_questions):
        assert QuizState.start(plain_questions).compute_score() == Score(0, 0, 5)

    def test_score_after_marking(self, plain_questions):
        state = QuizState.start(plain_questions).mark_self_evaluation(Evaluation.YES)
        state = state.advance().mark_self_evaluation(Evaluation.NO)
        score = state.compute_score()
        assert score.as_dict() == {"yes": 1, "no": 1, "unevaluated": 3}

    def test_score_with_shuffled_order(self, plain_questions):
        # evaluations are keyed by question index; the tally covers every
        # question in the order regardless of where it sits
        state = QuizState.start(plain_questions, order=[4, 2, 0, 3, 1])
        state = state.mark_self_evaluation(Evaluation.YES).advance().mark_self_evaluation(Evaluation.NO)
        assert state.evaluations == {4: Evaluation.YES, 2: Evaluation.NO}
        assert state.compute_score() == Score(yes=1, no=1, unevaluated=3)

    def test_score_counts_repeated_questions_separately(self):
        q = plain("Same?")
        state = QuizState.start([q, q, q]).mark_self_evaluation(Evaluation.YES)
        assert state.compute_score() == Score(1, 0, 2)


class TestImmutability:
    def test_operations_never_change_receiver(self, mixed_questions):
        state = QuizState.start(mixed_questions)
        before = (state.order, state.position, dict(state.evaluations), state.showing_answer)

        state.advance()
        state.toggle_answer_visibility()
        state.mark_self_evaluation(Evaluation.YES)
        state.shuffle(mixed_questions, rng=random.Random(1))

        assert (state.order, state.position, dict(state.evaluations), state.showing_answer) == before

    def test_derived_evaluations_are_independent(self, plain_questions):
        s = QuizState.start(plain_questions).mark_self_evaluation(Evaluation.NO)
        s2 = s.advance()
        s2.evaluations[1] = Evaluation.YES
        assert s.evaluations == {0: Evaluation.NO}
        assert s2.evaluations is not s.evaluations

    def test_snapshot_attributes_are_frozen(self, plain_questions):
        state = QuizState.start(plain_questions)
        with pytest.raises(AttributeError):
            state.position = 3


class TestShuffleTransition:
    def test_shuffle_keeps_prefix_and_fields(self, plain_questions):
        state = QuizState.start(plain_questions).advance().mark_self_evaluation(Evaluation.YES)
        state = state.toggle_answer_visibility()
        shuffled = state.shuffle(plain_questions, rng=random.Random(3))
        assert shuffled.order[:2] == state.order[:2]
        assert sorted(shuffled.order) == list(range(5))
        assert shuffled.position == state.position
        assert shuffled.evaluations == state.evaluations
        assert shuffled.showing_answer is True
