"""
Stored settings for AutoFeedback.
Keeps the caller's OpenAI API key in a small JSON key/value file so it
survives restarts.
"""
import os
import json
import logging

from autofeedback.config import config

logger = logging.getLogger(__name__)

API_KEY_SETTING = "openai_api_key"


class SettingsStore:
    """String key/value settings persisted to a JSON file."""

    def __init__(self, path: str = None):
        """
        Args:
            path: JSON file holding the settings (defaults to config.settings_file)
        """
        self.path = path or config.settings_file

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read settings file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        # Holds the API key: owner read/write only
        os.chmod(self.path, 0o600)

    def get(self, key: str, default: str = None):
        value = self._load().get(key)
        return value if isinstance(value, str) else default

    def set(self, key: str, value: str):
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def delete(self, key: str):
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class MemoryStore:
    """In-process settings store with the same get/set interface."""

    def __init__(self, initial: dict = None):
        self._data = dict(initial or {})

    def get(self, key: str, default: str = None):
        return self._data.get(key, default)

    def set(self, key: str, value: str):
        self._data[key] = str(value)

    def delete(self, key: str):
        self._data.pop(key, None)


def looks_like_openai_key(api_key: str) -> bool:
    """Loose format check: OpenAI keys start with "sk-" and are fairly long."""
    return api_key.startswith("sk-") and len(api_key) >= 20


def get_api_key(store=None) -> str:
    """Return the stored API key, falling back to OPENAI_API_KEY from the environment."""
    store = store if store is not None else SettingsStore()
    return store.get(API_KEY_SETTING) or os.getenv("OPENAI_API_KEY", "")


def set_api_key(api_key: str, store=None):
    """Save the caller's OpenAI API key. Blank keys are rejected."""
    api_key = (api_key or "").strip()
    if not api_key:
        raise ValueError("Please enter a valid API key")
    if not api_key.isascii():
        raise ValueError("API key contains non-ASCII characters; check for pasted quotes or ellipses")
    if not looks_like_openai_key(api_key):
        logger.warning('The API key format doesn\'t look right. OpenAI keys typically start with "sk-"')
    store = store if store is not None else SettingsStore()
    store.set(API_KEY_SETTING, api_key)
    logger.info("API key saved")


def clear_api_key(store=None):
    store = store if store is not None else SettingsStore()
    if hasattr(store, "delete"):
        store.delete(API_KEY_SETTING)
    else:
        store.set(API_KEY_SETTING, "")
