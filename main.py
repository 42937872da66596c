#!/usr/bin/env python3
"""
Quiz Topics - Main Entry Point

Loads the bundled and saved quiz topics and prints what is available.
Documents given on the command line are validated and saved as user topics.

Usage:
    python main.py [document.json ...]

Configuration:
    Directories and logging are read from config.json. The environment
    variables QUIZ_TOPICS_BUNDLED_DIR, QUIZ_TOPICS_SAVED_DIR and
    QUIZ_TOPICS_PREFERENCES_FILE override the file.
"""

import json
import logging
import sys
from pathlib import Path

from quiz_topics.config_manager import ConfigManager
from quiz_topics.preferences import PreferencesStore
from quiz_topics.topic_entry import TopicEntry
from quiz_topics.topic_registry import TopicRegistry


def load_config(config_path="config.json"):
    """Load configuration from config.json file."""
    config_path = Path(config_path)

    if not config_path.exists():
        print("❌ Error: config.json not found!")
        print("Please create config.json with a 'topics' section.")
        sys.exit(1)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
        return config
    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON in config.json: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"❌ Error loading config.json: {e}")
        sys.exit(1)


def setup_logging_from_config(config):
    """Set up logging based on configuration."""
    log_config = config.get('logging', {})
    log_level = getattr(logging, log_config.get('level', 'INFO').upper())
    log_directory = Path(log_config.get('log_directory', './logs/'))

    # Create logs directory
    log_directory.mkdir(exist_ok=True)

    # Configure logging
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_directory / "quiz_topics.log", encoding='utf-8')
        ]
    )


def build_registry(config):
    """Create the topic registry for this process."""
    config_manager = ConfigManager.from_dict(config)
    validation = config_manager.validate_settings()
    if not validation['valid']:
        for issue in validation['issues']:
            print(f"❌ Configuration issue: {issue}")
        sys.exit(1)

    preferences = PreferencesStore(config_manager.get_preferences_file())
    return TopicRegistry(config_manager, preferences)


def import_documents(registry, paths):
    """Validate documents from disk and save them as user topics."""
    for raw_path in paths:
        path = Path(raw_path)
        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            print(f"❌ Could not read {path}: {e}")
            continue

        quiz = registry.quiz_from_text(content)
        if quiz is None:
            print(f"❌ {path.name} is not a valid quiz document")
            continue

        if registry.save(TopicEntry(name=path.stem, quiz=quiz)):
            print(f"✅ Saved {path.stem}")
        else:
            print(f"⚠️ {path.stem} was not saved (already present or write failed)")


def print_topics(registry):
    """Print the settings and the current topics with per-group completion."""
    print(registry.config.get_settings_summary())

    source = "saved" if registry.use_saved_topics else "bundled"
    topics = registry.current_topics
    print(f"📚 {len(topics)} {source} topics")

    for topic in topics:
        completion = registry.completion_state(topic.name)
        done = sum(1 for index in range(topic.quiz.group_count()) if completion.get(index))
        time_text = f"{topic.quiz.time_limit:g}s" if topic.quiz.has_time_limit() else "no time limit"
        print(f"  • {topic.name}: {topic.quiz.question_count()} questions, "
              f"{done}/{topic.quiz.group_count()} sets completed, {time_text}")

    for error in registry.get_load_errors():
        print(f"⚠️ {error}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    config = load_config()
    setup_logging_from_config(config)

    registry = build_registry(config)
    if argv:
        import_documents(registry, argv)
    print_topics(registry)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Stopped by user")
