# =============================
# backend/app/errors.py
# =============================
from __future__ import annotations


class ToolError(Exception):
    """Base class for failures raised while serving a tool call."""


class ArgumentError(ToolError):
    """Caller supplied arguments of the wrong shape (or none at all)."""


class UnknownTool(ToolError):
    def __init__(self, name: str | None):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class NetworkError(ToolError):
    """The provider could not be reached."""


class UpstreamError(ToolError):
    def __init__(self, status: int, reason: str, body: str):
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"Perplexity API error: {status} {reason}\n{body}")


class DecodeError(ToolError):
    """The provider answered 2xx but the body was not the expected JSON."""
