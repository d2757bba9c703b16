# =============================
# backend/app/mcp/session.py
# =============================
from __future__ import annotations
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Protocol


logger = logging.getLogger(__name__)


class Channel(Protocol):
    def close(self) -> None: ...


class Session:
    def __init__(self, session_id: str, channel: Channel):
        self.id = session_id
        self.channel = channel
        self.created_at = datetime.now(timezone.utc)


class SessionStore:
    """Open notification channels keyed by session id.

    Ids are generated here, never taken from a client. All access to the
    mapping holds ``_lock``; nothing under the lock awaits.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._data: Dict[str, Session] = {}

    def open(self, channel_factory: Callable[[str], Channel]) -> Session:
        with self._lock:
            sid = uuid.uuid4().hex
            while sid in self._data:
                sid = uuid.uuid4().hex
            s = Session(sid, channel_factory(sid))
            self._data[sid] = s
        logger.info("Session %s opened (%d open)", sid, len(self))
        return s

    def get(self, session_id: str | None) -> Session | None:
        if not session_id:
            return None
        with self._lock:
            return self._data.get(session_id)

    def close(self, session_id: str) -> None:
        with self._lock:
            s = self._data.pop(session_id, None)
        if s is None:
            return
        s.channel.close()
        logger.info("Session %s closed (%d open)", session_id, len(self))

    def close_all(self) -> None:
        for sid in self.ids():
            self.close(sid)

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


store = SessionStore()
