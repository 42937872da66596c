"""
Registry of bundled and user-saved quiz topics.
"""
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .codec import DOCUMENT_EXTENSION, decode_quiz, encode_quiz
from .config_manager import ConfigManager
from .errors import DocumentDecodeError, QuizValidationError, TopicWriteError
from .models import Quiz
from .preferences import PreferencesStore
from .topic_entry import TopicEntry
from .validator import prepare_quiz


class TopicRegistry:
    """
    Owns the bundled and saved topic collections and their completion state.

    Build one registry at startup and pass it to whatever needs topics. All
    directory scans run eagerly and synchronously; every public method holds
    a single lock.
    """

    USER_TOPIC_NAME_FORMAT = "User Topic - {counter}" + DOCUMENT_EXTENSION

    def __init__(self, config: ConfigManager, preferences: PreferencesStore):
        """
        Scan both topic directories and initialize completion state.

        Args:
            config: Directory and selection settings
            preferences: Persistent counter and completion state
        """
        self.logger = logging.getLogger(__name__)
        self.config = config
        self.preferences = preferences
        self.bundled_directory = Path(config.get_bundled_directory())
        self.saved_directory = Path(config.get_saved_directory())
        self._lock = threading.RLock()
        self._use_saved_topics = config.get_use_saved_topics()

        self._bundled_topics, self._bundled_errors = self._scan_directory(self.bundled_directory)
        self._saved_topics, self._saved_errors = self._scan_directory(self.saved_directory)
        self._initialize_completion_state(self._bundled_topics)
        self._initialize_completion_state(self._saved_topics)

        self.logger.info(f"Loaded {len(self._bundled_topics)} bundled and "
                         f"{len(self._saved_topics)} saved topics")

    @property
    def bundled_topics(self) -> List[TopicEntry]:
        with self._lock:
            return list(self._bundled_topics)

    @property
    def saved_topics(self) -> List[TopicEntry]:
        with self._lock:
            return list(self._saved_topics)

    @property
    def use_saved_topics(self) -> bool:
        return self._use_saved_topics

    @use_saved_topics.setter
    def use_saved_topics(self, value: bool) -> None:
        with self._lock:
            self._use_saved_topics = bool(value)

    @property
    def current_topics(self) -> List[TopicEntry]:
        """Saved topics when ``use_saved_topics`` is set, bundled topics otherwise."""
        with self._lock:
            return list(self._saved_topics if self._use_saved_topics else self._bundled_topics)

    def find_topic(self, name: str) -> Optional[TopicEntry]:
        """Return the current topic called ``name``, if any."""
        with self._lock:
            for topic in self.current_topics:
                if topic.name == name:
                    return topic
            return None

    def reload_saved_topics(self) -> None:
        """Rescan the saved directory. Existing completion flags are kept."""
        with self._lock:
            self._saved_topics, self._saved_errors = self._scan_directory(self.saved_directory)
            self._initialize_completion_state(self._saved_topics)
            self.logger.info(f"Reloaded {len(self._saved_topics)} saved topics")

    def save(self, topic: TopicEntry) -> bool:
        """
        Write ``topic`` to the saved directory and reload saved topics.

        A topic whose name or questions match an already saved topic is not
        written again. A blank name is replaced by a numbered user topic name.

        Args:
            topic: Topic to persist

        Returns:
            True if the topic was written, False otherwise
        """
        with self._lock:
            if any(saved.matches(topic) for saved in self._saved_topics):
                self.logger.info(f"Topic '{topic.name}' is already saved")
                return False

            file_name = self._file_name_for(topic.name)
            try:
                self._write_topic(file_name, topic.quiz)
            except TopicWriteError as e:
                self.logger.error(f"Failed to save topic '{topic.name}': {e}")
                return False

            self.preferences.increment_saved_questions_counter()
            self.logger.info(f"Saved topic as {file_name}")
            self.reload_saved_topics()
            return True

    def quiz_from_text(self, content: Optional[str]) -> Optional[Quiz]:
        """
        Decode and validate a quiz from an in-memory document.

        Returns:
            The normalized quiz, or None if the content is missing, not a quiz
            document, or not valid
        """
        if content is None:
            return None

        try:
            return prepare_quiz(decode_quiz(content))
        except DocumentDecodeError as e:
            self.logger.debug(f"Could not decode quiz text: {e}")
        except QuizValidationError as e:
            self.logger.debug(f"Quiz text is not valid: {e}")
        return None

    def is_completed(self, topic_name: str, group_index: int) -> bool:
        with self._lock:
            return self.preferences.is_completed(topic_name, group_index)

    def set_completed(self, topic_name: str, group_index: int, completed: bool = True) -> None:
        with self._lock:
            self.preferences.set_completed(topic_name, group_index, completed)

    def completion_state(self, topic_name: str) -> Dict[int, bool]:
        with self._lock:
            return self.preferences.completion_state(topic_name)

    def get_load_errors(self) -> List[str]:
        """Errors met during the latest bundled and saved scans."""
        with self._lock:
            return self._bundled_errors + self._saved_errors

    def get_loading_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the latest scans.

        Returns:
            Dictionary with topic counts, directories and errors
        """
        with self._lock:
            errors = self.get_load_errors()
            return {
                'bundled_topics': len(self._bundled_topics),
                'saved_topics': len(self._saved_topics),
                'use_saved_topics': self._use_saved_topics,
                'bundled_directory': str(self.bundled_directory),
                'saved_directory': str(self.saved_directory),
                'has_errors': bool(errors),
                'error_count': len(errors),
                'errors': errors,
                'available_topics': [topic.name for topic in self.current_topics]
            }

    def _scan_directory(self, directory: Path) -> Tuple[List[TopicEntry], List[str]]:
        """
        Load every valid document in ``directory``.

        Invalid files are skipped and reported in the returned error list. A
        file whose topic matches one already loaded is skipped too.
        """
        topics: List[TopicEntry] = []
        errors: List[str] = []

        try:
            files = sorted(
                path for path in directory.iterdir()
                if path.suffix == DOCUMENT_EXTENSION
                and not path.name.startswith('.')
                and path.is_file()
            )
        except FileNotFoundError:
            self.logger.debug(f"Topic directory does not exist: {directory}")
            return topics, errors
        except OSError as e:
            self.logger.error(f"Failed to scan topic directory {directory}: {e}")
            errors.append(f"{directory}: {e}")
            return topics, errors

        for path in files:
            result = TopicEntry.load_path(path)
            if not result.success:
                self.logger.warning(f"Skipping topic file {path.name}: {result.error}")
                errors.append(f"{path.name}: {result.error}")
                continue
            if any(existing.matches(result.topic) for existing in topics):
                self.logger.info(f"Skipping duplicate topic file {path.name}")
                continue
            topics.append(result.topic)

        return topics, errors

    def _initialize_completion_state(self, topics: Iterable[TopicEntry]) -> None:
        added = False
        for topic in topics:
            for group_index in range(topic.quiz.group_count()):
                if self.preferences.ensure_completion_entry(topic.name, group_index):
                    added = True
        if added:
            self.preferences.flush()

    def _file_name_for(self, topic_name: str) -> str:
        if not topic_name.strip():
            return self.USER_TOPIC_NAME_FORMAT.format(
                counter=self.preferences.saved_questions_counter
            )
        if topic_name.endswith(DOCUMENT_EXTENSION):
            return topic_name
        return topic_name + DOCUMENT_EXTENSION

    def _write_topic(self, file_name: str, quiz: Quiz) -> Path:
        if Path(file_name).name != file_name:
            raise TopicWriteError(f"Invalid topic file name: {file_name}")

        try:
            content = encode_quiz(quiz)
        except (TypeError, ValueError) as e:
            raise TopicWriteError(f"Could not serialize quiz: {e}") from e

        path = self.saved_directory / file_name
        try:
            self.saved_directory.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise TopicWriteError(f"Could not write {path}: {e}") from e
        return path
