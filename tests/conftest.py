import os
import sys
import pathlib

import pytest

# Ensure project root is importable in tests
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# config fails fast without a key, so set one before anything imports it
os.environ.setdefault("PERPLEXITY_API_KEY", "test-key")

from backend.app.llm import perplexity  # noqa: E402


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", reason="OK", text_error=False):
        self.status_code = status_code
        self.reason = reason
        self.ok = 200 <= status_code < 300
        self._payload = payload
        self._text = text
        self._text_error = text_error

    @property
    def text(self):
        if self._text_error:
            raise RuntimeError("connection dropped mid-body")
        return self._text

    def json(self):
        if self._payload is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def provider(monkeypatch):
    """Install a fake provider session; call with a FakeResponse or exc=..."""

    def install(response=None, exc=None):
        session = FakeSession(response=response, exc=exc)
        monkeypatch.setattr(perplexity, "_session", session)
        return session

    return install


@pytest.fixture
def answer(provider):
    """Provider that answers every call with 'hello' and one citation."""
    return provider(FakeResponse(payload={
        "choices": [{"message": {"content": "hello"}}],
        "citations": ["http://a"],
    }))


@pytest.fixture
def make_response():
    return FakeResponse
