"""
Unit tests for quiz normalization and validation.
"""
import unittest

from quiz_topics.errors import QuizValidationError
from quiz_topics.models import Question, Quiz
from quiz_topics.validator import (
    find_violation,
    is_valid,
    normalize_quiz,
    prepare_quiz,
    validate_quiz,
)
from tests.test_fixtures import TestFixtures


def single_question_quiz(**kwargs) -> Quiz:
    defaults = {"question_text": "Q?", "answers": ["a", "b", "c", "d"], "correct_answers": {0}}
    defaults.update(kwargs)
    return Quiz([[Question(**defaults)]])


class TestNormalizeQuiz(unittest.TestCase):
    """Test cases for folding single correct indices."""

    def test_single_correct_index_is_folded(self):
        """Second question's single index becomes its correct answer set."""
        quiz = Quiz([[
            Question("First?", ["a", "b", "c", "d"], {1}),
            Question("Second?", ["e", "f", "g", "h"], single_correct_index=2),
        ]])

        normalized = normalize_quiz(quiz)

        self.assertEqual(normalized.question_groups[0][0].correct_answers, {1})
        self.assertEqual(normalized.question_groups[0][1].correct_answers, {2})
        self.assertTrue(validate_quiz(normalized))
        self.assertTrue(is_valid(quiz))

    def test_single_index_is_merged_with_existing_answers(self):
        quiz = single_question_quiz(correct_answers={0}, single_correct_index=3)

        self.assertEqual(normalize_quiz(quiz).question_groups[0][0].correct_answers, {0, 3})

    def test_input_is_not_mutated(self):
        quiz = single_question_quiz(correct_answers=set(), single_correct_index=2)

        normalize_quiz(quiz)

        self.assertEqual(quiz.question_groups[0][0].correct_answers, set())

    def test_time_limit_is_kept(self):
        self.assertEqual(normalize_quiz(TestFixtures.create_sample_quiz()).time_limit, 60)


class TestValidateQuiz(unittest.TestCase):
    """Test cases for structural validation rules."""

    def test_valid_quiz(self):
        """A valid quiz passes and every question ends with correct answers."""
        normalized = normalize_quiz(TestFixtures.create_sample_quiz())

        self.assertTrue(validate_quiz(normalized))
        for question in normalized.questions():
            self.assertTrue(question.correct_answers)

    def test_zero_groups_fail(self):
        self.assertFalse(is_valid(Quiz(question_groups=[])))

    def test_answer_count_mismatch_fails(self):
        quiz = Quiz([[
            Question("First?", ["a", "b", "c", "d"], {0}),
            Question("Second?", ["a", "b", "c"], {0}),
        ]])

        self.assertFalse(is_valid(quiz))

    def test_groups_may_differ_in_answer_count(self):
        quiz = Quiz([
            [Question("First?", ["a", "b", "c", "d"], {0})],
            [Question("Second?", ["a", "b"], {1})],
        ])

        self.assertTrue(is_valid(quiz))

    def test_single_empty_group_passes(self):
        """An empty group has nothing to check, so it passes."""
        self.assertTrue(is_valid(Quiz([[]])))

    def test_empty_group_next_to_valid_group_passes(self):
        quiz = Quiz([
            [],
            [Question("First?", ["a", "b", "c", "d"], {0})],
        ])

        self.assertTrue(is_valid(quiz))

    def test_empty_group_next_to_invalid_group_fails(self):
        quiz = Quiz([
            [],
            [Question("First?", ["a", "b", "c", "d"], set())],
        ])

        self.assertFalse(is_valid(quiz))

    def test_duplicate_answer_fails(self):
        self.assertFalse(is_valid(single_question_quiz(answers=["a", "a", "b", "c"])))

    def test_duplicate_after_trimming_fails(self):
        self.assertFalse(is_valid(single_question_quiz(answers=["a", " a ", "b", "c"])))

    def test_all_answers_correct_fails(self):
        self.assertFalse(is_valid(single_question_quiz(correct_answers={0, 1, 2, 3})))

    def test_single_index_making_all_correct_fails(self):
        quiz = single_question_quiz(answers=["a", "b"], correct_answers={0}, single_correct_index=1)

        self.assertFalse(is_valid(quiz))

    def test_no_correct_answer_fails(self):
        self.assertFalse(is_valid(single_question_quiz(correct_answers=set())))

    def test_correct_index_out_of_range_fails(self):
        self.assertFalse(is_valid(single_question_quiz(correct_answers={4})))

    def test_single_index_out_of_range_fails(self):
        self.assertFalse(is_valid(single_question_quiz(correct_answers=set(), single_correct_index=4)))

    def test_empty_question_text_fails(self):
        self.assertFalse(is_valid(single_question_quiz(question_text="   ")))

    def test_empty_answer_fails(self):
        self.assertFalse(is_valid(single_question_quiz(answers=["a", "", "b", "c"])))

    def test_unnormalized_quiz_relying_on_single_index_fails(self):
        """validate_quiz does not fold indices itself."""
        quiz = single_question_quiz(correct_answers=set(), single_correct_index=1)

        self.assertFalse(validate_quiz(quiz))
        self.assertTrue(is_valid(quiz))

    def test_violation_message_names_the_question(self):
        quiz = Quiz([[Question("Q?", ["a", "b"], {0})], [Question("Q?", ["a", "a"], {0})]])

        self.assertIn("Group 1 question 0", find_violation(normalize_quiz(quiz)))


class TestPrepareQuiz(unittest.TestCase):
    """Test cases for the raising variant used when loading."""

    def test_returns_normalized_quiz(self):
        prepared = prepare_quiz(single_question_quiz(correct_answers=set(), single_correct_index=2))

        self.assertEqual(prepared.question_groups[0][0].correct_answers, {2})

    def test_raises_on_invalid_quiz(self):
        with self.assertRaises(QuizValidationError):
            prepare_quiz(Quiz(question_groups=[]))


if __name__ == '__main__':
    unittest.main()
