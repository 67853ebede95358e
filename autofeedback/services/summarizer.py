"""
Document Summarizer
===================
Summarizes extracted submission text through an ordered chain of strategies:

1. OpenAI chat completions (caller's API key, skipped in free mode)
2. Free-tier summarization API (no auth)
3. Local extractive summary (cannot fail)

Each strategy either returns a summary or raises RemoteServiceError, in
which case the next one is tried. summarize() never raises.
"""
import logging

import requests
from openai import OpenAI, OpenAIError

from autofeedback.config import (
    config, PRIMARY_MAX_CHARS, FREE_MAX_CHARS, EXTRACTIVE_MAX_PARAGRAPHS,
    SUMMARY_MAX_TOKENS, SUMMARY_TEMPERATURE,
    FREE_SUMMARY_MAX_LENGTH, FREE_SUMMARY_MIN_LENGTH,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an assistant that writes comprehensive summaries of documents. "
    "Cover the main points, key arguments, and conclusions. "
    "Keep the summary clear, well organized, and under 500 words."
)

SUMMARY_HEADING = "Document Summary:"


class RemoteServiceError(Exception):
    """A summarization backend failed or returned an unusable response."""


def truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def document_stats(text: str) -> tuple:
    """Return (paragraph_count, approximate_word_count) for text."""
    paragraphs = [p for p in text.split("\n") if p.strip()]
    return len(paragraphs), len(text.split())


class SummaryStrategy:
    """Base class: summarize text or raise RemoteServiceError."""

    name = "base"

    def summarize(self, text: str) -> str:
        raise NotImplementedError


class OpenAISummarizer(SummaryStrategy):
    """Summarize with OpenAI chat completions using the caller's key."""

    name = "openai"

    def __init__(self, api_key: str, model: str = None, timeout: float = None, client=None):
        self.api_key = api_key
        self.model = model or config.openai_model
        self.timeout = timeout if timeout is not None else config.openai_timeout
        self._client = client

    def _get_client(self):
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def summarize(self, text: str) -> str:
        prompt = (
            "Please provide a comprehensive summary of the following document:\n\n"
            + truncate(text, PRIMARY_MAX_CHARS)
        )
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=SUMMARY_MAX_TOKENS,
                temperature=SUMMARY_TEMPERATURE,
            )
        except OpenAIError as e:
            raise RemoteServiceError(f"OpenAI request failed: {e}") from e
        except Exception as e:
            # e.g. UnicodeEncodeError while building headers from a bad key
            raise RemoteServiceError(f"OpenAI request could not be sent: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise RemoteServiceError("Malformed OpenAI response") from e
        if not isinstance(content, str) or not content.strip():
            raise RemoteServiceError("OpenAI returned an empty summary")
        return content.strip()


class FreeTierSummarizer(SummaryStrategy):
    """Summarize with a free, unauthenticated inference endpoint."""

    name = "free"

    def __init__(self, url: str = None, timeout: float = None):
        self.url = url or config.free_api_url
        self.timeout = timeout if timeout is not None else config.free_api_timeout

    def summarize(self, text: str) -> str:
        payload = {
            "inputs": truncate(text, FREE_MAX_CHARS),
            "parameters": {
                "max_length": FREE_SUMMARY_MAX_LENGTH,
                "min_length": FREE_SUMMARY_MIN_LENGTH,
            },
        }
        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise RemoteServiceError(f"Free summarization request failed: {e}") from e
        except ValueError as e:
            raise RemoteServiceError("Free summarization API returned invalid JSON") from e

        summary = _parse_free_response(data)
        paragraphs, words = document_stats(text)
        return (
            f"{summary}\n\nDocument statistics: {paragraphs} paragraphs, "
            f"approximately {words} words."
        )


def _parse_free_response(data) -> str:
    """Accept [{"summary_text": ...}] or a bare string; anything else is a failure."""
    summary = None
    if isinstance(data, list) and data and isinstance(data[0], dict):
        summary = data[0].get("summary_text") or data[0].get("summary")
    elif isinstance(data, str):
        summary = data

    if not isinstance(summary, str) or not summary.strip():
        raise RemoteServiceError(f"Unexpected free summarization response: {type(data).__name__}")
    return summary.strip()


class ExtractiveSummarizer(SummaryStrategy):
    """Local fallback: the first few paragraphs plus document statistics."""

    name = "extractive"

    def __init__(self, max_paragraphs: int = EXTRACTIVE_MAX_PARAGRAPHS):
        self.max_paragraphs = max_paragraphs

    def summarize(self, text: str) -> str:
        paragraphs = [p.strip() for p in text.split("\n") if p.strip()]
        paragraph_count, word_count = document_stats(text)
        body = "\n\n".join(paragraphs[:self.max_paragraphs])
        return (
            f"{SUMMARY_HEADING}\n\n{body}\n\n"
            f"(The document contains {paragraph_count} paragraphs and "
            f"approximately {word_count} words.)"
        )


def build_strategies(use_free_model: bool, api_key: str = "") -> list:
    """Ordered strategy chain for the selected mode."""
    strategies = []
    if not use_free_model and api_key:
        strategies.append(OpenAISummarizer(api_key))
    strategies.append(FreeTierSummarizer())
    strategies.append(ExtractiveSummarizer())
    return strategies


def summarize(text: str, use_free_model: bool = False, api_key: str = "",
              notify=None, strategies: list = None) -> str:
    """
    Summarize document text, degrading through the strategy chain on failure.

    Args:
        text: Extracted document text
        use_free_model: Skip the OpenAI strategy
        api_key: Caller's OpenAI key; a missing key also means the free path
        notify: Optional callback receiving advisory messages
        strategies: Override the strategy chain (mainly for tests)

    Returns:
        Summary string. Never raises.
    """
    if strategies is None:
        strategies = build_strategies(use_free_model, api_key)
    if not strategies or not isinstance(strategies[-1], ExtractiveSummarizer):
        strategies = list(strategies) + [ExtractiveSummarizer()]

    *remote, terminal = strategies
    for strategy in remote:
        try:
            summary = strategy.summarize(text)
            logger.info("Summary produced by %s strategy", strategy.name)
            return summary
        except RemoteServiceError as e:
            logger.warning("%s summarization failed: %s", strategy.name, e)
            if strategy.name == "openai" and notify is not None:
                notify("OpenAI summarization failed, falling back to the free model")

    logger.info("Using local extractive summary")
    return terminal.summarize(text)
