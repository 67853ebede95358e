"""
Shared test fixtures for AutoFeedback.
Zero network calls: requests.post and the OpenAI client are stubbed, the
settings file lives in tmp_path and the simulated delay is disabled.
"""
import pytest
import fitz
import requests

from autofeedback.config import Config, config
from autofeedback.settings_store import MemoryStore, API_KEY_SETTING
import autofeedback.services.summarizer as summarizer_mod

VALID_KEY = "sk-test-0123456789abcdef"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeOpenAI:
    """Stand-in for openai.OpenAI; behaviour set through class attributes."""

    content = "OpenAI summary of the document."
    error = None
    calls = []
    instances = []

    def __init__(self, api_key=None, timeout=None, max_retries=None):
        self.api_key = api_key
        self.timeout = timeout
        self.max_retries = max_retries
        FakeOpenAI.instances.append(self)
        self.chat = self
        self.completions = self

    def create(self, **kwargs):
        FakeOpenAI.calls.append(kwargs)
        if FakeOpenAI.error is not None:
            raise FakeOpenAI.error

        class _Message:
            content = FakeOpenAI.content

        class _Choice:
            message = _Message()

        class _Response:
            choices = [_Choice()]

        return _Response()


def make_pdf(*pages) -> bytes:
    """Build PDF bytes with one page per argument ("" gives a blank page)."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture(autouse=True)
def _isolate(monkeypatch, tmp_path):
    """Keep tests away from the real settings file, env key and network."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr(config, "settings_file", str(tmp_path / "settings.json"))
    monkeypatch.setattr(config, "use_free_model", False)

    def _offline(*args, **kwargs):
        raise requests.ConnectionError("network disabled in tests")

    monkeypatch.setattr(summarizer_mod.requests, "post", _offline)

    FakeOpenAI.content = "OpenAI summary of the document."
    FakeOpenAI.error = None
    FakeOpenAI.calls = []
    FakeOpenAI.instances = []
    monkeypatch.setattr(summarizer_mod, "OpenAI", FakeOpenAI)


@pytest.fixture
def fake_openai():
    return FakeOpenAI


@pytest.fixture
def free_api(monkeypatch):
    """Make the free summarization API answer with the given response."""
    captured = {}

    def _install(response):
        def _post(url, json=None, timeout=None, **kwargs):
            captured["url"] = url
            captured["json"] = json
            captured["timeout"] = timeout
            return response
        monkeypatch.setattr(summarizer_mod.requests, "post", _post)
        return captured

    return _install


@pytest.fixture
def test_config():
    """Config with no simulated delay."""
    cfg = Config()
    cfg.feedback_delay = 0
    return cfg


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def keyed_store():
    return MemoryStore({API_KEY_SETTING: VALID_KEY})


@pytest.fixture
def report_pdf():
    return make_pdf("Intro. Body. Conclusion.")


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture
def fake_response():
    return FakeResponse
