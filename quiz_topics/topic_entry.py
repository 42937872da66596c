"""
Named quiz topics loaded from bundled resources or arbitrary files.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .codec import DOCUMENT_EXTENSION, decode_quiz
from .errors import DocumentDecodeError, LoadErrorKind, LoadResult, QuizValidationError
from .models import Quiz
from .validator import prepare_quiz

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class TopicEntry:
    """
    A named, loaded quiz.

    Two entries compare equal (and hash alike) when their names match, whatever
    their contents. Use ``matches`` to also treat identical contents as the
    same topic.
    """
    name: str = ""
    quiz: Quiz = field(default_factory=Quiz)

    def __eq__(self, other):
        if not isinstance(other, TopicEntry):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def matches(self, other: "TopicEntry") -> bool:
        """Return True if ``other`` has the same name or the same questions."""
        return self.name == other.name or self.quiz == other.quiz

    @classmethod
    def load_resource(cls, name: str, bundle_directory: Union[str, Path]) -> LoadResult:
        """
        Load a topic bundled as ``<bundle_directory>/<name>.json``.

        Args:
            name: Resource name without extension
            bundle_directory: Directory holding the bundled documents

        Returns:
            LoadResult with the topic, or the reason it could not be loaded
        """
        path = Path(bundle_directory) / f"{name}{DOCUMENT_EXTENSION}"
        if not path.is_file():
            return LoadResult.failed(LoadErrorKind.NOT_FOUND, f"Bundled topic not found: {name}")
        return cls._load(name, path)

    @classmethod
    def load_path(cls, path: Union[str, Path]) -> LoadResult:
        """
        Load a topic from any document file; the name is the file stem.

        Args:
            path: Path to the document file

        Returns:
            LoadResult with the topic, or the reason it could not be loaded
        """
        path = Path(path)
        if not path.is_file():
            return LoadResult.failed(LoadErrorKind.NOT_FOUND, f"Topic file not found: {path}")
        return cls._load(path.stem, path)

    @classmethod
    def from_resource(cls, name: str, bundle_directory: Union[str, Path]) -> Optional["TopicEntry"]:
        """Like ``load_resource`` but logs failures and returns None."""
        result = cls.load_resource(name, bundle_directory)
        if not result.success:
            logger.warning(f"Error initializing quiz content. Topic name: {name}. {result.error}")
        return result.topic

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> Optional["TopicEntry"]:
        """Like ``load_path`` but logs failures and returns None."""
        result = cls.load_path(path)
        if not result.success:
            logger.warning(f"Error initializing quiz content. Quiz path: {Path(path).name}. {result.error}")
        return result.topic

    @classmethod
    def _load(cls, name: str, path: Path) -> LoadResult:
        try:
            content = path.read_bytes()
        except FileNotFoundError:
            return LoadResult.failed(LoadErrorKind.NOT_FOUND, f"Topic file not found: {path}")
        except OSError as e:
            return LoadResult.failed(LoadErrorKind.READ, f"Failed to read {path}: {e}")

        try:
            quiz = prepare_quiz(decode_quiz(content))
        except DocumentDecodeError as e:
            return LoadResult.failed(LoadErrorKind.DECODE, str(e))
        except QuizValidationError as e:
            return LoadResult.failed(LoadErrorKind.VALIDATION, str(e))

        logger.info(f"Loaded topic '{name}' with {quiz.question_count()} questions "
                    f"in {quiz.group_count()} groups")
        return LoadResult.ok(cls(name=name, quiz=quiz))
