"""
Placeholder Grader
==================
Picks a canned feedback template from the file's extension and draws a
random score. Nothing here looks at the file's content: score_file() is a
stand-in for a real scoring model and is the only function that needs to
change when one is available.
"""
import random

from autofeedback.config import DOCUMENT_EXTENSIONS, IMAGE_EXTENSIONS

MIN_SCORE = 60
MAX_SCORE = 100

FEEDBACK_TEMPLATES = {
    "pdf": {
        "feedback": (
            "This document demonstrates good structure and organization. The arguments "
            "are well-presented, though some citations could be improved."
        ),
        "strengths": [
            "Well-structured document with clear sections",
            "Good use of evidence to support arguments",
            "Proper formatting and presentation",
        ],
        "areas_for_improvement": [
            "Consider adding more recent references",
            "Some paragraphs could be more concise",
            "Expand on the conclusion to reinforce key points",
        ],
    },
    "image": {
        "feedback": (
            "The visual presentation is clear, with good use of color and contrast. "
            "The layout could be improved for better information hierarchy."
        ),
        "strengths": [
            "Clear visual elements",
            "Good use of color palette",
            "Effective communication of main concept",
        ],
        "areas_for_improvement": [
            "Consider adjusting the layout for better balance",
            "Text elements could be more readable",
            "Add more context to support the visual elements",
        ],
    },
    "other": {
        "feedback": (
            "This submission has been reviewed and shows good effort. There are some "
            "areas that could be improved for clarity and completeness."
        ),
        "strengths": [
            "Good overall effort",
            "Clear attempt to address the assignment requirements",
            "Logical organization of ideas",
        ],
        "areas_for_improvement": [
            "More detailed explanations would strengthen the work",
            "Consider adding more examples to illustrate key points",
            "Review for consistency throughout the submission",
        ],
    },
}

PROCESSING_FAILED_TEMPLATE = {
    "feedback": (
        "We couldn't read the text in this PDF. It may be corrupted or a scanned "
        "image without a text layer, so no summary could be generated."
    ),
    "strengths": ["File upload succeeded"],
    "areas_for_improvement": ["Try again with a text-based PDF"],
}

# (minimum score, label), highest first
GRADE_LABELS = [
    (90, "Excellent"),
    (80, "Good"),
    (70, "Satisfactory"),
    (60, "Needs Improvement"),
]


def classify_file(file_name: str) -> str:
    """Return "pdf", "image" or "other" from the file extension."""
    name = file_name.lower()
    if name.endswith(tuple(DOCUMENT_EXTENSIONS)):
        return "pdf"
    if name.endswith(tuple(IMAGE_EXTENSIONS)):
        return "image"
    return "other"


def get_template(file_name: str, extraction_failed: bool = False) -> dict:
    """Fresh copy of the feedback template for a file."""
    template = PROCESSING_FAILED_TEMPLATE if extraction_failed else FEEDBACK_TEMPLATES[classify_file(file_name)]
    return {
        "feedback": template["feedback"],
        "strengths": list(template["strengths"]),
        "areas_for_improvement": list(template["areas_for_improvement"]),
    }


def score_file(file_name: str) -> int:
    """Placeholder score, uniform in [60, 100]. Ignores the file entirely."""
    return random.randint(MIN_SCORE, MAX_SCORE)


def grade(file_name: str, extraction_failed: bool = False) -> dict:
    """Score plus feedback text, strengths and areas_for_improvement."""
    result = get_template(file_name, extraction_failed)
    result["score"] = score_file(file_name)
    return result


def grade_label(score: int) -> str:
    for minimum, label in GRADE_LABELS:
        if score >= minimum:
            return label
    return "Unsatisfactory"
