"""
AutoFeedback Package
====================

Automated feedback for uploaded assignment files.

Structure:
- services/: Feedback pipeline (text extraction, summarization, grading)
- settings_store.py: Stored OpenAI API key
- config.py: Configuration management
- cli.py: Command-line runner
"""

from .config import config, Config, set_mode
from .settings_store import get_api_key, set_api_key, clear_api_key
from .services.feedback_service import (
    FeedbackRecord, UploadedFile, generate_feedback,
    generate_feedback_batch, generate_feedback_sync,
)

__version__ = "1.0.0"

__all__ = [
    'config', 'Config', 'set_mode',
    'get_api_key', 'set_api_key', 'clear_api_key',
    'FeedbackRecord', 'UploadedFile', 'generate_feedback',
    'generate_feedback_batch', 'generate_feedback_sync',
]
