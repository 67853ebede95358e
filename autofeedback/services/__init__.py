"""
AutoFeedback Services
=====================

Feedback pipeline services.

Services:
- text_extractor: PDF text extraction
- summarizer: OpenAI / free API / extractive summary chain
- grader: Placeholder grading templates and scores
- feedback_service: Assembles FeedbackRecords
"""

# Services are imported directly when needed to avoid circular imports
# Example: from autofeedback.services.feedback_service import generate_feedback

__all__ = [
    'text_extractor',
    'summarizer',
    'grader',
    'feedback_service'
]
