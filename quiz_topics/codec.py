"""
JSON codec for quiz documents.

Expected structure:
{
    "topic": [
        [
            {
                "question": str,
                "answers": [str, ...],
                "correctAnswers": [int, ...],  # Optional
                "correct": int,                # Optional
                "imageURL": str                # Optional
            }
        ]
    ],
    "time": number                             # Optional
}
"""
import json
from typing import Any, Dict, List, Union

from .errors import DocumentDecodeError
from .models import NO_TIME_LIMIT, Question, Quiz

DOCUMENT_EXTENSION = ".json"

# Answer indices are stored as small unsigned integers
MAX_ANSWER_INDEX = 255


def _is_answer_index(value: Any) -> bool:
    return (isinstance(value, int) and not isinstance(value, bool)
            and 0 <= value <= MAX_ANSWER_INDEX)


def _parse_question(data: Any, label: str) -> Question:
    if not isinstance(data, dict):
        raise DocumentDecodeError(f"{label} must be an object")

    text = data.get("question")
    if not isinstance(text, str):
        raise DocumentDecodeError(f"{label} 'question' field must be a string")

    answers = data.get("answers")
    if not isinstance(answers, list) or not all(isinstance(a, str) for a in answers):
        raise DocumentDecodeError(f"{label} 'answers' field must be an array of strings")

    correct_answers = data.get("correctAnswers")
    if correct_answers is None:
        correct_answers = []
    if not isinstance(correct_answers, list) or not all(_is_answer_index(i) for i in correct_answers):
        raise DocumentDecodeError(f"{label} 'correctAnswers' field must be an array of answer indices")

    single_correct = data.get("correct")
    if single_correct is not None and not _is_answer_index(single_correct):
        raise DocumentDecodeError(f"{label} 'correct' field must be an answer index")

    image_url = data.get("imageURL")
    if image_url is not None and not isinstance(image_url, str):
        raise DocumentDecodeError(f"{label} 'imageURL' field must be a string")

    return Question(
        question_text=text,
        answers=answers,
        correct_answers=set(correct_answers),
        single_correct_index=single_correct,
        image_url=image_url
    )


def quiz_from_document(data: Any) -> Quiz:
    """
    Map a parsed JSON document onto a Quiz.

    Args:
        data: Parsed JSON value

    Returns:
        Quiz built from the document (not yet validated)

    Raises:
        DocumentDecodeError: If the document does not have the quiz shape
    """
    if not isinstance(data, dict):
        raise DocumentDecodeError("Quiz document must be a JSON object")

    groups = data.get("topic")
    if not isinstance(groups, list):
        raise DocumentDecodeError("Quiz document must contain a 'topic' array")

    question_groups: List[List[Question]] = []
    for group_index, group in enumerate(groups):
        if not isinstance(group, list):
            raise DocumentDecodeError(f"Group {group_index} must be an array")
        question_groups.append([
            _parse_question(question, f"Group {group_index} question {question_index}")
            for question_index, question in enumerate(group)
        ])

    time_limit = data.get("time")
    if time_limit is None:
        time_limit = NO_TIME_LIMIT
    elif isinstance(time_limit, bool) or not isinstance(time_limit, (int, float)):
        raise DocumentDecodeError("'time' field must be a number")

    return Quiz(question_groups=question_groups, time_limit=time_limit)


def quiz_to_document(quiz: Quiz) -> Dict[str, Any]:
    """Build the JSON-ready document for ``quiz``."""
    groups = []
    for group in quiz.question_groups:
        questions = []
        for question in group:
            entry = {
                "question": question.question_text,
                "answers": list(question.answers),
                "correctAnswers": sorted(question.correct_answers),
            }
            if question.single_correct_index is not None:
                entry["correct"] = question.single_correct_index
            if question.image_url is not None:
                entry["imageURL"] = question.image_url
            questions.append(entry)
        groups.append(questions)

    return {"topic": groups, "time": quiz.time_limit}


def decode_quiz(content: Union[str, bytes]) -> Quiz:
    """
    Parse a quiz document from text or UTF-8 bytes.

    Raises:
        DocumentDecodeError: If the content is not JSON or not a quiz document
    """
    try:
        data = json.loads(content)
    except ValueError as e:
        # Covers JSONDecodeError and UnicodeDecodeError
        raise DocumentDecodeError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise DocumentDecodeError("Document is nested too deeply") from e
    return quiz_from_document(data)


def encode_quiz(quiz: Quiz) -> str:
    """Serialize ``quiz`` to JSON text."""
    return json.dumps(quiz_to_document(quiz), indent=2, ensure_ascii=False)
