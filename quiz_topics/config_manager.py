"""
Configuration manager for topic directories and storage settings.
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional


class ConfigManager:
    """Manages where topics are read from and where user data is written."""

    # Default configuration values
    DEFAULT_BUNDLED_DIRECTORY = "./topics/"
    DEFAULT_SAVED_DIRECTORY = "./saved_topics/"
    DEFAULT_PREFERENCES_FILE = "./preferences.json"
    DEFAULT_USE_SAVED_TOPICS = False

    # Environment variables take precedence over config.json
    ENV_BUNDLED_DIRECTORY = "QUIZ_TOPICS_BUNDLED_DIR"
    ENV_SAVED_DIRECTORY = "QUIZ_TOPICS_SAVED_DIR"
    ENV_PREFERENCES_FILE = "QUIZ_TOPICS_PREFERENCES_FILE"

    def __init__(self):
        """Initialize ConfigManager with default settings."""
        self.logger = logging.getLogger(__name__)
        self._bundled_directory = self.DEFAULT_BUNDLED_DIRECTORY
        self._saved_directory = self.DEFAULT_SAVED_DIRECTORY
        self._preferences_file = self.DEFAULT_PREFERENCES_FILE
        self._use_saved_topics = self.DEFAULT_USE_SAVED_TOPICS

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "ConfigManager":
        """
        Build a ConfigManager from the parsed config.json.

        Only the 'topics' section is read. Invalid values are logged and the
        defaults kept.

        Args:
            config: Parsed configuration dictionary

        Returns:
            Configured ConfigManager
        """
        manager = cls()
        section = (config or {}).get('topics', {})

        bundled = os.getenv(cls.ENV_BUNDLED_DIRECTORY) or section.get('bundled_directory')
        saved = os.getenv(cls.ENV_SAVED_DIRECTORY) or section.get('saved_directory')
        preferences = os.getenv(cls.ENV_PREFERENCES_FILE) or section.get('preferences_file')

        if bundled is not None:
            manager.set_bundled_directory(bundled)
        if saved is not None:
            manager.set_saved_directory(saved)
        if preferences is not None:
            manager.set_preferences_file(preferences)
        if 'use_saved_topics' in section:
            manager.set_use_saved_topics(section['use_saved_topics'])

        return manager

    def _validate_path(self, value: Any, label: str) -> Dict[str, Any]:
        if not isinstance(value, str):
            error_msg = f"{label} must be a string, got {type(value).__name__}"
            self.logger.error(error_msg)
            return {'success': False, 'error': error_msg}

        if not value.strip():
            error_msg = f"{label} cannot be empty"
            self.logger.error(error_msg)
            return {'success': False, 'error': error_msg}

        try:
            normalized_path = str(Path(value).expanduser().resolve())
        except (OSError, ValueError) as e:
            error_msg = f"Invalid {label.lower()} format: {e}"
            self.logger.error(error_msg)
            return {'success': False, 'error': error_msg}

        return {'success': True, 'path': normalized_path}

    def set_bundled_directory(self, directory: str) -> Dict[str, Any]:
        """
        Set the read-only directory holding bundled topic documents.

        Args:
            directory: Path to the bundled topics directory

        Returns:
            Dictionary with success status and message or error
        """
        result = self._validate_path(directory, "Bundled directory")
        if not result['success']:
            return result

        self._bundled_directory = result['path']
        self.logger.info(f"Bundled directory set to {result['path']}")
        return {'success': True, 'message': f"Bundled directory set to {result['path']}"}

    def get_bundled_directory(self) -> str:
        return self._bundled_directory

    def set_saved_directory(self, directory: str) -> Dict[str, Any]:
        """
        Set the user-writable directory where saved topics live.

        Args:
            directory: Path to the saved topics directory

        Returns:
            Dictionary with success status and message or error
        """
        result = self._validate_path(directory, "Saved directory")
        if not result['success']:
            return result

        self._saved_directory = result['path']
        self.logger.info(f"Saved directory set to {result['path']}")
        return {'success': True, 'message': f"Saved directory set to {result['path']}"}

    def get_saved_directory(self) -> str:
        return self._saved_directory

    def set_preferences_file(self, path: str) -> Dict[str, Any]:
        """
        Set the JSON file that stores the saved-topic counter and completion state.

        Args:
            path: Path to the preferences file

        Returns:
            Dictionary with success status and message or error
        """
        result = self._validate_path(path, "Preferences file")
        if not result['success']:
            return result

        self._preferences_file = result['path']
        self.logger.info(f"Preferences file set to {result['path']}")
        return {'success': True, 'message': f"Preferences file set to {result['path']}"}

    def get_preferences_file(self) -> str:
        return self._preferences_file

    def set_use_saved_topics(self, use_saved_topics: bool) -> Dict[str, Any]:
        """
        Choose whether saved topics or bundled topics are current.

        Args:
            use_saved_topics: True to expose saved topics

        Returns:
            Dictionary with success status and message or error
        """
        if not isinstance(use_saved_topics, bool):
            error_msg = f"Use saved topics must be a boolean, got {type(use_saved_topics).__name__}"
            self.logger.error(error_msg)
            return {'success': False, 'error': error_msg}

        self._use_saved_topics = use_saved_topics
        source = "saved" if use_saved_topics else "bundled"
        self.logger.info(f"Current topics set to {source}")
        return {'success': True, 'message': f"Current topics set to {source}"}

    def get_use_saved_topics(self) -> bool:
        return self._use_saved_topics

    def validate_settings(self) -> Dict[str, Any]:
        """
        Validate current settings and return validation results.

        Returns:
            Dictionary with validation results and any issues found
        """
        validation_result = {
            "valid": True,
            "issues": []
        }

        for label, value in (("bundled directory", self._bundled_directory),
                             ("saved directory", self._saved_directory),
                             ("preferences file", self._preferences_file)):
            if not isinstance(value, str) or not value.strip():
                validation_result["valid"] = False
                validation_result["issues"].append(f"Invalid {label}: {value}")

        if not isinstance(self._use_saved_topics, bool):
            validation_result["valid"] = False
            validation_result["issues"].append(
                f"Invalid use saved topics setting: {self._use_saved_topics}"
            )

        if (isinstance(self._bundled_directory, str) and isinstance(self._saved_directory, str)
                and Path(self._bundled_directory).resolve() == Path(self._saved_directory).resolve()):
            validation_result["valid"] = False
            validation_result["issues"].append(
                "Bundled and saved directories must be different"
            )

        return validation_result

    def get_settings_summary(self) -> str:
        """
        Get a formatted summary of current settings.

        Returns:
            Human-readable string describing current settings
        """
        source = "saved" if self._use_saved_topics else "bundled"
        return (
            f"Topic Settings:\n"
            f"• Bundled Directory: {self._bundled_directory}\n"
            f"• Saved Directory: {self._saved_directory}\n"
            f"• Preferences File: {self._preferences_file}\n"
            f"• Current Topics: {source}"
        )
