"""
Feedback Assembler
==================
Entry point of the feedback pipeline. For each uploaded file:

1. Wait the simulated inference delay
2. PDF only: extract text, then summarize it (OpenAI / free API / extractive)
3. Grade from the file name (canned template + placeholder score)
4. Package everything as a FeedbackRecord

generate_feedback() always resolves to a record; extraction and remote
service failures are absorbed into degraded feedback.
"""
import os
import random
import string
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from autofeedback.config import config
from autofeedback.settings_store import get_api_key
from autofeedback.services.text_extractor import (
    ExtractionError, extract_text, get_file_name, is_pdf,
)
from autofeedback.services.summarizer import summarize
from autofeedback.services.grader import grade, grade_label

logger = logging.getLogger(__name__)

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 7


@dataclass
class UploadedFile:
    """An uploaded file: declared name plus raw bytes."""

    name: str
    content: bytes = field(default=b"", repr=False)

    def read(self) -> bytes:
        return self.content

    @classmethod
    def from_path(cls, path: str) -> "UploadedFile":
        with open(path, "rb") as f:
            return cls(name=os.path.basename(path), content=f.read())


@dataclass(frozen=True)
class FeedbackRecord:
    id: str
    file_name: str
    score: int
    feedback: str
    strengths: Tuple[str, ...]
    areas_for_improvement: Tuple[str, ...]
    timestamp: datetime
    summary: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "strengths", tuple(self.strengths))
        object.__setattr__(self, "areas_for_improvement", tuple(self.areas_for_improvement))

    @property
    def grade_label(self) -> str:
        return grade_label(self.score)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "fileName": self.file_name,
            "score": self.score,
            "gradeLabel": self.grade_label,
            "feedback": self.feedback,
            "strengths": list(self.strengths),
            "areasForImprovement": list(self.areas_for_improvement),
            "timestamp": self.timestamp.isoformat(),
        }
        if self.summary is not None:
            data["summary"] = self.summary
        return data


def generate_id() -> str:
    """Short random id. Unique enough to correlate results within a session."""
    return "".join(random.choices(ID_ALPHABET, k=ID_LENGTH))


def _notify(notify, message: str):
    if notify is not None:
        notify(message)


async def generate_feedback(file, cfg=None, store=None, notify=None) -> FeedbackRecord:
    """
    Generate feedback for one uploaded file.

    Args:
        file: Upload with a name (.name or .filename) and read() -> bytes
        cfg: Config to use (defaults to the global config); the mode flag is
             read once when the call starts
        store: Settings store holding the OpenAI API key
        notify: Optional callback for advisory messages (may be called from a
                worker thread)

    Returns:
        FeedbackRecord
    """
    cfg = cfg or config
    use_free_model = cfg.use_free_model
    file_name = get_file_name(file)
    logger.info("Generating feedback for %s", file_name)

    if cfg.feedback_delay > 0:
        await asyncio.sleep(cfg.feedback_delay)

    summary = None
    extraction_failed = False

    if is_pdf(file_name):
        try:
            text = await asyncio.to_thread(extract_text, file)
        except ExtractionError as e:
            extraction_failed = True
            logger.warning("Text extraction failed for %s: %s", file_name, e)
            _notify(notify, f"Could not extract text from {file_name}. Try a text-based PDF.")
        else:
            api_key = "" if use_free_model else await asyncio.to_thread(get_api_key, store)
            summary = await asyncio.to_thread(
                summarize, text, use_free_model, api_key, notify
            )

    result = grade(file_name, extraction_failed=extraction_failed)

    record = FeedbackRecord(
        id=generate_id(),
        file_name=file_name,
        score=result["score"],
        feedback=result["feedback"],
        strengths=result["strengths"],
        areas_for_improvement=result["areas_for_improvement"],
        timestamp=datetime.now(),
        summary=summary,
    )
    logger.info("Feedback %s ready for %s (score %d)", record.id, file_name, record.score)
    return record


async def generate_feedback_batch(files, cfg=None, store=None, notify=None) -> List[FeedbackRecord]:
    """Generate feedback for several files concurrently.

    Records come back in completion order, not input order; match them to
    files by file_name or id.
    """
    tasks = [generate_feedback(f, cfg=cfg, store=store, notify=notify) for f in files]
    records = []
    for future in asyncio.as_completed(tasks):
        records.append(await future)
    return records


def generate_feedback_sync(file, cfg=None, store=None, notify=None) -> FeedbackRecord:
    """Blocking wrapper around generate_feedback for scripts."""
    return asyncio.run(generate_feedback(file, cfg=cfg, store=store, notify=notify))
