"""
Structural validation of decoded quizzes.

Validation is split in two phases. ``normalize_quiz`` returns a copy of the quiz
where each question's legacy ``single_correct_index`` has been folded into its
``correct_answers``; ``validate_quiz`` then checks the normalized copy without
touching it. Callers that keep the quiz must keep the normalized copy.
"""
import logging
from dataclasses import replace
from typing import Optional

from .errors import QuizValidationError
from .models import Quiz, Question

logger = logging.getLogger(__name__)

# Answer count assumed for a group that has no questions
DEFAULT_ANSWER_COUNT = 4


def normalize_question(question: Question) -> Question:
    """Return a copy of ``question`` with its single correct index folded in."""
    correct_answers = set(question.correct_answers or ())
    if question.single_correct_index is not None:
        correct_answers.add(question.single_correct_index)
    return replace(question, correct_answers=correct_answers)


def normalize_quiz(quiz: Quiz) -> Quiz:
    """Return a normalized copy of ``quiz``. The argument is left untouched."""
    return Quiz(
        question_groups=[[normalize_question(question) for question in group]
                         for group in quiz.question_groups],
        time_limit=quiz.time_limit
    )


def find_violation(quiz: Quiz) -> Optional[str]:
    """
    Check a normalized quiz against every structural rule.

    Args:
        quiz: Quiz returned by ``normalize_quiz``

    Returns:
        Description of the first rule broken, or None if the quiz is valid
    """
    if not quiz.question_groups:
        return "Quiz has no question groups"

    for group_index, group in enumerate(quiz.question_groups):
        expected_count = len(group[0].answers) if group else DEFAULT_ANSWER_COUNT

        for question_index, question in enumerate(group):
            label = f"Group {group_index} question {question_index}"
            correct_answers = question.correct_answers or set()

            if not question.question_text:
                return f"{label}: question text is empty"
            if len(question.answers) != expected_count:
                return (f"{label}: has {len(question.answers)} answers, "
                        f"expected {expected_count}")
            if len(set(question.answers)) != expected_count:
                return f"{label}: answers are not unique"
            if any(not 0 <= index < expected_count for index in correct_answers):
                return f"{label}: correct answer index out of range"
            if (question.single_correct_index is not None
                    and not 0 <= question.single_correct_index < expected_count):
                return f"{label}: single correct index out of range"
            if not 0 < len(correct_answers) < expected_count:
                return (f"{label}: must have at least one and fewer than "
                        f"{expected_count} correct answers")
            if any(not answer for answer in question.answers):
                return f"{label}: an answer is empty"

    for group_index, group in enumerate(quiz.question_groups):
        if any(not question.correct_answers for question in group):
            return f"Group {group_index} has a question without correct answers"

    return None


def validate_quiz(quiz: Quiz) -> bool:
    """Return True if a normalized quiz satisfies every structural rule."""
    violation = find_violation(quiz)
    if violation is not None:
        logger.debug(f"Quiz failed validation: {violation}")
        return False
    return True


def is_valid(quiz: Quiz) -> bool:
    """Normalize and validate ``quiz`` in one step."""
    return validate_quiz(normalize_quiz(quiz))


def prepare_quiz(quiz: Quiz) -> Quiz:
    """
    Normalize and validate a freshly decoded quiz.

    Args:
        quiz: Quiz as produced by the document codec

    Returns:
        The normalized quiz

    Raises:
        QuizValidationError: If the quiz breaks a structural rule
    """
    normalized = normalize_quiz(quiz)
    violation = find_violation(normalized)
    if violation is not None:
        logger.debug(f"Quiz failed validation: {violation}")
        raise QuizValidationError(violation)
    return normalized
