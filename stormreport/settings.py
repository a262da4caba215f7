"""
Settings Management for the storm report

Settings live in settings.json in the project root and are merged over
DEFAULT_SETTINGS, so a partial file only overrides what it names.
"""

import json
import logging
from pathlib import Path

from .constants import SOURCE_INFO
from .paths import settings_path

logger = logging.getLogger(__name__)

# Default settings
DEFAULT_SETTINGS = {
    "dataset_url": SOURCE_INFO["source_url"],
    "dataset_file": "StormData.csv.bz2",
    "vocabulary_path": "",
    "vocabulary_url": "",
    "top_n": 10,
    "event_types": ["Tornado", "Flood", "Excessive Heat"],
    "normalizer_mode": "first_match",
    "output_dir": "",
    "download_timeout": 120,
}


def load_settings(path=None) -> dict:
    """
    Load settings from settings.json file.
    Returns default settings if file doesn't exist or can't be parsed.
    """
    path = Path(path) if path else settings_path()
    try:
        if path.exists():
            with open(path, 'r', encoding='utf-8') as f:
                settings = json.load(f)
                # Merge with defaults to ensure all keys exist
                return {**DEFAULT_SETTINGS, **settings}
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")

    return DEFAULT_SETTINGS.copy()


def save_settings(settings: dict, path=None) -> bool:
    """
    Save settings to settings.json file.
    Returns True on success, False on failure.
    """
    path = Path(path) if path else settings_path()
    try:
        # Merge with existing settings
        current = load_settings(path)
        current.update(settings)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(current, f, indent=2)
        return True
    except IOError as e:
        logger.error(f"Error saving settings: {e}")
        return False
