"""
Persistent user preferences: the saved-topic counter and completion state.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Union


class PreferencesStore:
    """Keeps small user preferences in a JSON file that survives restarts."""

    COUNTER_KEY = "savedQuestionsCounter"
    COMPLETED_SETS_KEY = "completedSets"

    def __init__(self, preferences_file: Union[str, Path] = "./preferences.json"):
        """
        Initialize the store and load any previously written preferences.

        Args:
            preferences_file: Path to the JSON preferences file
        """
        self.preferences_file = Path(preferences_file)
        self.logger = logging.getLogger(__name__)
        self._saved_questions_counter = 0
        self._completed_sets: Dict[str, Dict[int, bool]] = {}
        self._load()

    @property
    def saved_questions_counter(self) -> int:
        return self._saved_questions_counter

    def increment_saved_questions_counter(self) -> int:
        """Increment the counter, persist it and return the new value."""
        self._saved_questions_counter += 1
        self._write()
        return self._saved_questions_counter

    def ensure_completion_entry(self, topic_name: str, group_index: int) -> bool:
        """
        Record ``False`` for a group that has no completion entry yet.

        Returns:
            True if an entry was added, False if one already existed
        """
        groups = self._completed_sets.setdefault(topic_name, {})
        if group_index in groups:
            return False
        groups[group_index] = False
        return True

    def is_completed(self, topic_name: str, group_index: int) -> bool:
        return self._completed_sets.get(topic_name, {}).get(group_index, False)

    def set_completed(self, topic_name: str, group_index: int, completed: bool = True) -> None:
        self._completed_sets.setdefault(topic_name, {})[group_index] = completed
        self._write()

    def completion_state(self, topic_name: str) -> Dict[int, bool]:
        """Return a copy of the completion flags of one topic."""
        return dict(self._completed_sets.get(topic_name, {}))

    def all_completion_states(self) -> Dict[str, Dict[int, bool]]:
        return {name: dict(groups) for name, groups in self._completed_sets.items()}

    def flush(self) -> None:
        """Write the current preferences to disk."""
        self._write()

    def _load(self) -> None:
        if not self.preferences_file.exists():
            return

        try:
            with open(self.preferences_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON in {self.preferences_file}: {e}")
            return
        except OSError as e:
            self.logger.error(f"Failed to read preferences file {self.preferences_file}: {e}")
            return

        if not isinstance(data, dict):
            self.logger.error(f"Preferences in {self.preferences_file} must be a JSON object")
            return

        counter = data.get(self.COUNTER_KEY, 0)
        if isinstance(counter, int) and not isinstance(counter, bool) and counter >= 0:
            self._saved_questions_counter = counter
        else:
            self.logger.warning(f"Ignoring invalid {self.COUNTER_KEY}: {counter!r}")

        completed_sets = data.get(self.COMPLETED_SETS_KEY, {})
        if not isinstance(completed_sets, dict):
            self.logger.warning(f"Ignoring invalid {self.COMPLETED_SETS_KEY}")
            return

        for topic_name, groups in completed_sets.items():
            if not isinstance(groups, dict):
                continue
            # JSON object keys are strings
            for group_index, completed in groups.items():
                try:
                    index = int(group_index)
                except ValueError:
                    continue
                if not isinstance(completed, bool):
                    self.logger.warning(f"Ignoring invalid completion flag for {topic_name}[{group_index}]: {completed!r}")
                    continue
                self._completed_sets.setdefault(topic_name, {})[index] = completed

    def _write(self) -> None:
        data = {
            self.COUNTER_KEY: self._saved_questions_counter,
            self.COMPLETED_SETS_KEY: {
                name: {str(index): completed for index, completed in sorted(groups.items())}
                for name, groups in self._completed_sets.items()
            }
        }
        try:
            self.preferences_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.preferences_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            self.logger.error(f"Failed to write preferences file {self.preferences_file}: {e}")
