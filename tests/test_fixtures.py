"""
Test fixtures and sample data for quiz topic tests.
"""
import json
from pathlib import Path
from typing import Dict, List

from quiz_topics.models import Question, Quiz


class TestFixtures:
    """Centralized test fixtures for all test modules."""

    @staticmethod
    def create_sample_question(text: str = "What is 2+2?", correct=None, single=None) -> Question:
        """Create a four-answer question."""
        return Question(
            question_text=text,
            answers=["3", "4", "5", "22"],
            correct_answers=set(correct) if correct is not None else {1},
            single_correct_index=single
        )

    @staticmethod
    def create_sample_quiz() -> Quiz:
        """Create a valid two-group quiz."""
        return Quiz(
            question_groups=[
                [
                    Question("What is 2+2?", ["3", "4", "5", "22"], {1}),
                    Question("What is the capital of France?",
                             ["London", "Berlin", "Paris", "Madrid"], single_correct_index=2),
                ],
                [
                    Question("Which are prime?", ["2", "3", "4"], {0, 1}),
                ]
            ],
            time_limit=60
        )

    @staticmethod
    def create_other_quiz() -> Quiz:
        """Create a valid quiz with different questions from ``create_sample_quiz``."""
        return Quiz(
            question_groups=[[
                Question("What color is the sky?", ["Blue", "Green"], {0}),
            ]]
        )

    @staticmethod
    def create_valid_quiz_json() -> Dict:
        """Create a valid quiz document."""
        return {
            "topic": [
                [
                    {
                        "question": "What is the capital of Japan?",
                        "answers": ["Tokyo", "Kyoto", "Osaka", "Nagoya"],
                        "correctAnswers": [0]
                    },
                    {
                        "question": "What is 10 + 5?",
                        "answers": ["10", "15", "20", "25"],
                        "correct": 1,
                        "imageURL": " https://example.com/sum.png "
                    }
                ],
                [
                    {
                        "question": "Which of these are fruits?",
                        "answers": ["Apple", "Carrot", "Banana"],
                        "correctAnswers": [0, 2]
                    }
                ]
            ],
            "time": 90
        }

    @staticmethod
    def create_invalid_quiz_json_structures() -> List[Dict]:
        """Create documents that parse as JSON but fail validation."""
        return [
            # No question groups
            {"topic": []},
            # Duplicate answers
            {"topic": [[{"question": "Q?", "answers": ["a", "a", "b", "c"], "correctAnswers": [0]}]]},
            # Every answer correct
            {"topic": [[{"question": "Q?", "answers": ["a", "b"], "correctAnswers": [0, 1]}]]},
            # No correct answer
            {"topic": [[{"question": "Q?", "answers": ["a", "b"]}]]},
            # Empty question text
            {"topic": [[{"question": "  ", "answers": ["a", "b"], "correct": 0}]]},
        ]

    @staticmethod
    def write_json(path: Path, data) -> Path:
        """Write ``data`` as JSON to ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f)
        return path
