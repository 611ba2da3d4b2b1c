from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Optional

from seatmap.editor import EditorSession
from seatmap.model import Scene

logger = logging.getLogger(__name__)


@dataclass
class SessionHandle:
    id: str
    scene_id: int
    editor: EditorSession
    # Events for one session are applied strictly one at a time.
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionRegistry:
    """In-memory editing sessions keyed by id; nothing here is persisted."""

    def __init__(self) -> None:
        self._sessions: dict[str, SessionHandle] = {}
        self._lock = threading.Lock()

    def open(self, scene_id: int, scene: Scene) -> SessionHandle:
        handle = SessionHandle(id=uuid.uuid4().hex, scene_id=scene_id, editor=EditorSession(scene))
        with self._lock:
            self._sessions[handle.id] = handle
        logger.info("opened session %s on scene %s", handle.id, scene_id)
        return handle

    def get(self, session_id: str) -> Optional[SessionHandle]:
        with self._lock:
            return self._sessions.get(session_id)

    def close(self, session_id: str) -> bool:
        with self._lock:
            handle = self._sessions.pop(session_id, None)
        if handle is not None:
            logger.info("closed session %s", session_id)
        return handle is not None

    def close_for_scene(self, scene_id: int) -> int:
        with self._lock:
            ids = [sid for sid, h in self._sessions.items() if h.scene_id == scene_id]
            for sid in ids:
                del self._sessions[sid]
        return len(ids)


registry = SessionRegistry()
