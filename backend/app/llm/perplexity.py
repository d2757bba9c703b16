# backend/app/llm/perplexity.py
from __future__ import annotations
import logging
from typing import Any, Sequence

import requests

from ..config import PERPLEXITY_API_KEY, PERPLEXITY_API_URL, PERPLEXITY_TIMEOUT
from ..errors import DecodeError, NetworkError, UpstreamError

_session: requests.Session | None = None
log = logging.getLogger(__name__)

DEFAULT_MODEL = "sonar-pro"


def get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update({
            "Content-Type": "application/json",
            "Authorization": f"Bearer {PERPLEXITY_API_KEY}",
        })
    return _session


def format_citations(text: str, citations: Any) -> str:
    """Append a numbered ``Citations:`` footer when the provider returned any."""
    if not isinstance(citations, list) or not citations:
        return text
    footer = "".join(f"[{i}] {c}\n" for i, c in enumerate(citations, start=1))
    return f"{text}\n\nCitations:\n{footer}"


def _error_body(resp: requests.Response) -> str:
    try:
        return resp.text
    except Exception:  # body read failure must not mask the status
        return "Unable to parse error response"


def complete(messages: Sequence[dict], model: str = DEFAULT_MODEL) -> str:
    """
    Run one chat completion against the Perplexity API.
    - raises NetworkError if the request never got a response
    - raises UpstreamError on a non-2xx status
    - raises DecodeError if the body is not the expected JSON
    No retries: the first failure is surfaced.
    """
    url = f"{PERPLEXITY_API_URL}/chat/completions"
    body = {"model": model, "messages": list(messages)}
    log.debug("POST %s model=%s messages=%d", url, model, len(body["messages"]))

    try:
        resp = get_session().post(url, json=body, timeout=PERPLEXITY_TIMEOUT)
    except requests.exceptions.RequestException as e:
        log.warning("Perplexity request failed: %s", e)
        raise NetworkError(f"Network error while calling Perplexity API: {e}") from e

    if not resp.ok:
        err = UpstreamError(resp.status_code, resp.reason or "", _error_body(resp))
        log.warning("Perplexity returned %s %s", err.status, err.reason)
        raise err

    try:
        data = resp.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise DecodeError(f"Failed to parse JSON response from Perplexity API: {e}") from e

    return format_citations(content, data.get("citations"))
