import importlib

import pytest

from backend.app import config


def test_missing_api_key_fails_fast(monkeypatch):
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **k: False)
    monkeypatch.delenv("PERPLEXITY_API_KEY", raising=False)
    try:
        with pytest.raises(RuntimeError, match="PERPLEXITY_API_KEY"):
            importlib.reload(config)
    finally:
        monkeypatch.setenv("PERPLEXITY_API_KEY", "test-key")
        importlib.reload(config)


def test_defaults(monkeypatch):
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **k: False)
    for name in ("PORT", "PERPLEXITY_TIMEOUT", "PERPLEXITY_API_URL"):
        monkeypatch.delenv(name, raising=False)
    try:
        importlib.reload(config)
        assert config.PORT == 8080
        assert config.PERPLEXITY_TIMEOUT is None
        assert config.PERPLEXITY_API_URL == "https://api.perplexity.ai"
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_port_override(monkeypatch):
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **k: False)
    monkeypatch.setenv("PORT", "9090")
    try:
        importlib.reload(config)
        assert config.PORT == 9090
    finally:
        monkeypatch.undo()
        importlib.reload(config)
