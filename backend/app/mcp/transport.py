# =============================
# backend/app/mcp/transport.py
# =============================
from __future__ import annotations
import asyncio
import json
import logging
from typing import Any, AsyncIterator, Dict, Set

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response

from ..config import SSE_KEEPALIVE_SEC
from .models import rpc_error
from .protocol import INTERNAL_ERROR, handle_message

logger = logging.getLogger(__name__)


def sse_event(event: str, data: str) -> str:
    lines = "".join(f"data: {line}\n" for line in data.split("\n"))
    return f"event: {event}\n{lines}\n"


class SseChannel:
    """
    Server-to-client half of a session: an SSE stream fed by a queue.
    The stream starts with an ``endpoint`` event telling the client where to
    POST; replies to those posts come back as ``message`` events.
    """

    def __init__(self, post_path: str, session_id: str, keepalive: float = SSE_KEEPALIVE_SEC):
        self.session_id = session_id
        self.endpoint = f"{post_path}?sessionId={session_id}"
        self._keepalive = keepalive
        self._queue: asyncio.Queue[Dict[str, Any] | None] = asyncio.Queue()
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, message: Dict[str, Any]) -> None:
        if not self._closed:
            self._queue.put_nowait(message)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        self._queue.put_nowait(None)

    async def frames(self) -> AsyncIterator[str]:
        yield sse_event("endpoint", self.endpoint)
        while True:
            try:
                item = await asyncio.wait_for(self._queue.get(), timeout=self._keepalive)
            except asyncio.TimeoutError:
                yield ": keepalive\n\n"
                continue
            if item is None:
                return
            yield sse_event("message", json.dumps(item, ensure_ascii=False))

    async def handle_post_message(self, request: Request) -> Response:
        body = await request.body()
        try:
            message = json.loads(body)
        except ValueError:
            logger.warning("Session %s: undecodable message", self.session_id)
            return PlainTextResponse("Invalid message", status_code=400)

        for item in message if isinstance(message, list) else [message]:
            self.dispatch(item)
        return PlainTextResponse("Accepted", status_code=202)

    def dispatch(self, message: Any) -> asyncio.Task:
        # each message runs on its own; replies may go out of order
        task = asyncio.create_task(self._process(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _process(self, message: Any) -> None:
        try:
            reply = await handle_message(message)
        except Exception as e:
            logger.exception("Session %s: failed handling message", self.session_id)
            req_id = message.get("id") if isinstance(message, dict) else None
            reply = rpc_error(INTERNAL_ERROR, f"Internal error: {e}", req_id)
        if reply is not None:
            self.send(reply)
