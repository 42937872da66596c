"""
Core data models for quiz topics.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Set


# Marker for a quiz that has no time limit configured
NO_TIME_LIMIT = -1


@dataclass(eq=False)
class Question:
    """Represents a single quiz question with its candidate answers."""
    question_text: str
    answers: List[str] = field(default_factory=list)
    correct_answers: Set[int] = field(default_factory=set)
    single_correct_index: Optional[int] = None
    image_url: Optional[str] = None

    def __post_init__(self):
        self.question_text = self.question_text.strip()
        self.answers = [answer.strip() for answer in self.answers]
        self.correct_answers = set(self.correct_answers) if self.correct_answers is not None else set()
        if self.image_url is not None:
            self.image_url = self.image_url.strip()

    def __eq__(self, other):
        if not isinstance(other, Question):
            return NotImplemented
        return (self.question_text == other.question_text
                and self.answers == other.answers
                and self.correct_answers == other.correct_answers)

    __hash__ = None


@dataclass(eq=False)
class Quiz:
    """An ordered collection of question groups plus a time limit in seconds."""
    question_groups: List[List[Question]] = field(default_factory=lambda: [[]])
    time_limit: float = NO_TIME_LIMIT

    def questions(self) -> List[Question]:
        """Return every question of every group, in order."""
        return [question for group in self.question_groups for question in group]

    def group_count(self) -> int:
        return len(self.question_groups)

    def question_count(self) -> int:
        return sum(len(group) for group in self.question_groups)

    def has_time_limit(self) -> bool:
        return self.time_limit != NO_TIME_LIMIT

    def __eq__(self, other):
        # Group boundaries do not matter, only the flattened question order
        if not isinstance(other, Quiz):
            return NotImplemented
        return self.questions() == other.questions()

    __hash__ = None
