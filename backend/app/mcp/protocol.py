# =============================
# backend/app/mcp/protocol.py
# =============================
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from fastapi.concurrency import run_in_threadpool

from .. import __version__
from .dispatcher import call_tool
from .models import ToolCallRequest, rpc_error, rpc_result
from .tools import list_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "perplexity-mcp"
SUPPORTED_PROTOCOL_VERSIONS = ("2024-11-05", "2025-03-26")
DEFAULT_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[0]

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
PARSE_ERROR = -32700


def _initialize(params: Dict[str, Any]) -> Dict[str, Any]:
    requested = params.get("protocolVersion")
    version = requested if requested in SUPPORTED_PROTOCOL_VERSIONS else DEFAULT_PROTOCOL_VERSION
    return {
        "protocolVersion": version,
        "capabilities": {"tools": {}},
        "serverInfo": {"name": SERVER_NAME, "version": __version__},
    }


async def handle_message(message: Any) -> Optional[Dict[str, Any]]:
    """Process one JSON-RPC message from a session. Returns None when no reply is due."""
    if not isinstance(message, dict) or message.get("jsonrpc") != "2.0":
        req_id = message.get("id") if isinstance(message, dict) else None
        return rpc_error(INVALID_REQUEST, "Invalid Request", req_id)

    method = message.get("method")
    req_id = message.get("id")
    if method is None:
        # a client response to something we never sent
        logger.debug("Ignoring client response id=%s", req_id)
        return None
    if "id" not in message:
        logger.debug("Notification %s", method)
        return None

    params = message.get("params") or {}
    if not isinstance(params, dict):
        return rpc_error(INVALID_PARAMS, "Invalid params: params must be an object", req_id)

    if method == "initialize":
        return rpc_result(_initialize(params), req_id)
    if method == "ping":
        return rpc_result({}, req_id)
    if method == "tools/list":
        return rpc_result({"tools": list_tools()}, req_id)
    if method == "tools/call":
        req = ToolCallRequest.model_validate(params)
        result = await run_in_threadpool(call_tool, req.name, req.arguments)
        return rpc_result(result.dump(), req_id)

    return rpc_error(METHOD_NOT_FOUND, f"Method not found: {method}", req_id)
