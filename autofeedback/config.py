"""
Configuration management for AutoFeedback.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# User data
HOME_DIR = Path.home()
SETTINGS_FILE = os.path.expanduser(
    os.getenv("AUTOFEEDBACK_SETTINGS_FILE") or str(HOME_DIR / ".autofeedback_settings.json")
)

# API Configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TIMEOUT_SECONDS = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "30"))

FREE_SUMMARY_API_URL = os.getenv(
    "FREE_SUMMARY_API_URL",
    "https://api-inference.huggingface.co/models/facebook/bart-large-cnn",
)
FREE_API_TIMEOUT_SECONDS = float(os.getenv("FREE_API_TIMEOUT_SECONDS", "30"))

# Summarization limits
PRIMARY_MAX_CHARS = 15000
FREE_MAX_CHARS = 10000
EXTRACTIVE_MAX_PARAGRAPHS = 5
SUMMARY_MAX_TOKENS = 1000
SUMMARY_TEMPERATURE = 0.3
FREE_SUMMARY_MAX_LENGTH = 500
FREE_SUMMARY_MIN_LENGTH = 100

# Stand-in for model inference latency
FEEDBACK_DELAY_SECONDS = float(os.getenv("FEEDBACK_DELAY_SECONDS", "2.0"))

# File classes
DOCUMENT_EXTENSIONS = ['.pdf']
IMAGE_EXTENSIONS = ['.jpg', '.jpeg', '.png']


class Config:
    """Application configuration class."""

    def __init__(self):
        self.use_free_model = False
        self.openai_model = OPENAI_MODEL
        self.openai_timeout = OPENAI_TIMEOUT_SECONDS
        self.free_api_url = FREE_SUMMARY_API_URL
        self.free_api_timeout = FREE_API_TIMEOUT_SECONDS
        self.feedback_delay = FEEDBACK_DELAY_SECONDS
        self.settings_file = SETTINGS_FILE

    def to_dict(self):
        return {
            "use_free_model": self.use_free_model,
            "openai_model": self.openai_model,
            "openai_timeout": self.openai_timeout,
            "free_api_url": self.free_api_url,
            "free_api_timeout": self.free_api_timeout,
            "feedback_delay": self.feedback_delay,
            "settings_file": self.settings_file,
        }

    def update(self, data: dict):
        """Apply overrides (e.g. from CLI flags). Unknown keys are an error."""
        unknown = [key for key in data if key not in self.to_dict()]
        if unknown:
            raise KeyError(f"Unknown config setting(s): {', '.join(unknown)}")
        for key, value in data.items():
            setattr(self, key, value)


# Global config instance
config = Config()


def set_mode(use_free: bool):
    """Select the free summarization model (True) or the caller's OpenAI key (False)."""
    config.use_free_model = bool(use_free)
