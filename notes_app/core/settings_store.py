"""
Persisted user settings, stored as a JSON file.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from notes_app.config import config
from notes_app.utils.errors import ConfigurationError
from notes_app.utils.helpers import load_json, save_json
from notes_app.utils.logger import logging

SETTINGS_KEYS = ("apiKey", "searchEngineId", "documentId", "summaryMode", "downloadImages")


class SettingsStore:
    """Key-value settings shared between runs."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or config.SETTINGS_FILE)

    def load(self) -> Dict[str, Any]:
        """Load stored settings; a missing or unreadable file means no settings."""
        if not self.path.exists():
            return {}
        try:
            data = load_json(str(self.path))
        except (OSError, ValueError) as e:
            logging.warning(f"Could not read settings from {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logging.warning(f"Ignoring malformed settings file {self.path}")
            return {}
        return {key: data[key] for key in SETTINGS_KEYS if key in data}

    def save(self, settings: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge and persist settings.

        Args:
            settings: Values to store, keyed by the names in SETTINGS_KEYS

        Returns:
            The full stored settings

        Raises:
            ConfigurationError: If no API key would be stored
        """
        merged = self.load()
        merged.update({key: value for key, value in settings.items() if key in SETTINGS_KEYS})
        if not merged.get("apiKey"):
            raise ConfigurationError("Please provide an API Key.")

        self.path.parent.mkdir(parents=True, exist_ok=True)
        save_json(merged, str(self.path))
        logging.info(f"Settings saved to {self.path}")
        return merged
