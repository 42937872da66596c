"""
Error types and load results for quiz topic files.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class QuizTopicsError(Exception):
    """Base class for quiz topic errors."""


class DocumentDecodeError(QuizTopicsError):
    """Bytes could not be parsed as a quiz document."""


class QuizValidationError(QuizTopicsError):
    """A parsed quiz document violates a structural rule."""


class TopicWriteError(QuizTopicsError):
    """A topic could not be serialized or written to disk."""


class LoadErrorKind(Enum):
    """Reasons a topic file fails to load."""
    NOT_FOUND = "not_found"
    READ = "read"
    DECODE = "decode"
    VALIDATION = "validation"


@dataclass
class LoadResult:
    """Outcome of loading a single topic file."""
    success: bool
    topic: Optional["TopicEntry"] = None
    error_kind: Optional[LoadErrorKind] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, topic: "TopicEntry") -> "LoadResult":
        return cls(success=True, topic=topic)

    @classmethod
    def failed(cls, error_kind: LoadErrorKind, error: str) -> "LoadResult":
        return cls(success=False, error_kind=error_kind, error=error)
