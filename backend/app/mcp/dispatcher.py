# =============================
# backend/app/mcp/dispatcher.py
# =============================
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from ..errors import ArgumentError, UnknownTool
from ..llm import perplexity
from .models import Message, ToolCallResult
from .tools import TOOL_MODELS

logger = logging.getLogger(__name__)

_messages_adapter = TypeAdapter(List[Message])


def validate_messages(name: str, arguments: Dict[str, Any]) -> List[dict]:
    raw = arguments.get("messages")
    if not isinstance(raw, list):
        raise ArgumentError(f"Invalid arguments for {name}: 'messages' must be an array")
    try:
        _messages_adapter.validate_python(raw)
    except ValidationError as e:
        raise ArgumentError(
            f"Invalid arguments for {name}: 'messages' items must be objects "
            f"with string 'role' and 'content'"
        ) from e
    # forwarded as sent; keys beyond role and content go to the provider too
    return raw


def dispatch(name: Optional[str], arguments: Optional[Dict[str, Any]]) -> str:
    """Run a tool and return its text. Raises ToolError subclasses on failure."""
    if arguments is None:
        raise ArgumentError("No arguments provided")
    if not isinstance(arguments, dict):
        raise ArgumentError(f"Invalid arguments for {name}: arguments must be an object")
    model = TOOL_MODELS.get(name) if isinstance(name, str) else None
    if model is None:
        raise UnknownTool(name)
    messages = validate_messages(name, arguments)
    logger.info("Calling %s with model %s (%d messages)", name, model, len(messages))
    return perplexity.complete(messages, model)


def call_tool(name: Optional[str], arguments: Optional[Dict[str, Any]]) -> ToolCallResult:
    """
    Session-path conversion point: never raises.
    An unknown tool is reported as a result with isError set, the same way
    a failed call is, but with its own "Unknown tool:" text.
    """
    try:
        return ToolCallResult.text(dispatch(name, arguments))
    except UnknownTool as e:
        return ToolCallResult.text(str(e), is_error=True)
    except Exception as e:
        logger.warning("Tool %s failed: %s", name, e)
        return ToolCallResult.text(f"Error: {e}", is_error=True)
