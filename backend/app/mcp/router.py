# =============================
# backend/app/mcp/router.py
# =============================
from __future__ import annotations
import logging
from typing import Any, Optional

from fastapi import APIRouter, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse

from ..config import SSE_KEEPALIVE_SEC
from ..errors import ArgumentError, UnknownTool
from .dispatcher import dispatch
from .models import ToolCallRequest, ToolCallResult, rpc_error, rpc_result
from .protocol import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR
from .session import store
from .tools import list_tools
from .transport import SseChannel

logger = logging.getLogger(__name__)
router = APIRouter(tags=["mcp"])

MESSAGES_PATH = "/messages"


# ---------- Session path ----------
@router.get("/sse")
async def open_sse(request: Request):
    post_path = request.scope.get("root_path", "") + MESSAGES_PATH
    session = store.open(lambda sid: SseChannel(post_path, sid, keepalive=SSE_KEEPALIVE_SEC))

    async def stream():
        try:
            async for frame in session.channel.frames():
                yield frame
        finally:
            store.close(session.id)

    return StreamingResponse(
        stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.post(MESSAGES_PATH)
async def post_message(request: Request, session_id: Optional[str] = Query(None, alias="sessionId")):
    session = store.get(session_id)
    if session is None:
        logger.warning("POST for unknown session %s", session_id)
        return PlainTextResponse("No transport found for sessionId", status_code=400)
    return await session.channel.handle_post_message(request)


# ---------- Direct path ----------
def _rpc(payload: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(payload, status_code=status_code)


async def _call_direct(params: Any, req_id: Any) -> Response:
    req = ToolCallRequest.model_validate(params if isinstance(params, dict) else {})
    name, args = req.name, req.arguments
    if args is None:
        return _rpc(rpc_error(INVALID_PARAMS, "Invalid params: No arguments provided", req_id), 400)
    try:
        text = await run_in_threadpool(dispatch, name, args)
    except UnknownTool:
        # unlike the session path, an unknown tool is a protocol error here
        return _rpc(rpc_error(METHOD_NOT_FOUND, f"Method not found: {name}", req_id), 400)
    except ArgumentError as e:
        return _rpc(rpc_error(INVALID_PARAMS, str(e), req_id), 400)
    return _rpc(rpc_result(ToolCallResult.text(text).dump(), req_id))


@router.post("/api/tools/call")
async def direct_call(request: Request):
    req_id = None
    try:
        try:
            body = await request.json()
        except ValueError:
            return _rpc(rpc_error(PARSE_ERROR, "Parse error: body must be JSON"), 400)
        if not isinstance(body, dict):
            return _rpc(rpc_error(INVALID_REQUEST, "Invalid Request: body must be an object"), 400)

        req_id = body.get("id")
        if body.get("jsonrpc") != "2.0":
            return _rpc(rpc_error(INVALID_REQUEST, "Invalid Request: jsonrpc must be '2.0'", req_id), 400)

        method = body.get("method")
        if method in ("tools/call", "tool_code"):
            return await _call_direct(body.get("params"), req_id)
        if method == "tools/list":
            return _rpc(rpc_result({"tools": list_tools()}, req_id))
        return _rpc(rpc_error(METHOD_NOT_FOUND, f"Method not found: {method}", req_id), 400)
    except Exception as e:
        logger.exception("Error handling direct API request")
        return _rpc(rpc_error(INTERNAL_ERROR, f"Internal error: {e}", req_id), 500)
