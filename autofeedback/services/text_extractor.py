"""
Text extraction for uploaded submissions.
Only PDFs carry text we can read; every other file type yields "".
"""
import logging

import fitz  # PyMuPDF

from autofeedback.config import DOCUMENT_EXTENSIONS

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """The file could not be read as a text-bearing PDF."""


def get_file_name(file) -> str:
    """Declared name of an upload (werkzeug-style .filename or file-object .name)."""
    name = getattr(file, "filename", None) or getattr(file, "name", None)
    if not name:
        raise ValueError("Uploaded file has no name")
    return str(name)


def is_pdf(file_name: str) -> bool:
    return file_name.lower().endswith(tuple(DOCUMENT_EXTENSIONS))


def extract_text_from_bytes(file_bytes: bytes) -> str:
    """Extract text from PDF bytes using PyMuPDF.

    Words on a page are joined with a single space and pages with a newline,
    in page order. Raises ExtractionError if the data is not a readable PDF
    or no page has a text layer.
    """
    try:
        doc = fitz.open(stream=file_bytes, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise ExtractionError(f"Could not open PDF: {e}") from e

    try:
        if doc.needs_pass:
            raise ExtractionError("PDF is password protected")
        if doc.page_count == 0:
            raise ExtractionError("PDF has no pages")

        pages = []
        for page in doc:
            words = page.get_text("words")
            pages.append(" ".join(w[4] for w in words))
    except RuntimeError as e:
        raise ExtractionError(f"Could not read PDF: {e}") from e
    finally:
        doc.close()

    if not any(p.strip() for p in pages):
        raise ExtractionError("PDF has no embedded text (scanned image?)")

    logger.debug("Extracted %d pages of text", len(pages))
    return "\n".join(pages)


def extract_text(file) -> str:
    """Return the text of a PDF upload, or "" for any other file type.

    Non-PDF files are not read at all.
    """
    file_name = get_file_name(file)
    if not is_pdf(file_name):
        return ""
    return extract_text_from_bytes(file.read())
