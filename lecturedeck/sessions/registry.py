"""
In-process registry of open study sessions
"""
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from typing import Optional

from config import settings
from lecturedeck.exceptions import SessionNotFoundError
from lecturedeck.models.content import Module
from lecturedeck.sessions.study_controller import StudyController
from lecturedeck.utils.logger import get_logger
from lecturedeck.utils.notifications import LoggingNotificationSink, MemoryNotificationSink

logger = get_logger(__name__)


@dataclass
class SessionEntry:
    """A controller plus the notifications waiting for its client"""
    session_id: str
    controller: StudyController
    notifications: MemoryNotificationSink
    created_at: datetime = field(default_factory=datetime.now)


class SessionRegistry:
    """
    Keeps study sessions in memory, oldest evicted first once full.

    Nothing is persisted: a restart or an eviction ends the session.
    """

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = settings.MAX_SESSIONS if max_sessions is None else max_sessions
        if self.max_sessions < 1:
            raise ValueError(f"max_sessions must be at least 1, got {self.max_sessions}")
        self._entries: "OrderedDict[str, SessionEntry]" = OrderedDict()
        self._lock = Lock()

    def create(self, module: Module) -> SessionEntry:
        """Open a study session over a module snapshot"""
        notifications = MemoryNotificationSink(forward=LoggingNotificationSink())
        entry = SessionEntry(
            session_id=str(uuid.uuid4()),
            controller=StudyController(module, notifier=notifications),
            notifications=notifications,
        )
        with self._lock:
            self._entries[entry.session_id] = entry
            while len(self._entries) > self.max_sessions:
                evicted_id, _ = self._entries.popitem(last=False)
                logger.info(f"Evicted study session {evicted_id}")

        logger.info(f"Opened study session {entry.session_id} for module {module.id}")
        return entry

    def get(self, session_id: str) -> SessionEntry:
        with self._lock:
            entry = self._entries.get(session_id)
        if entry is None:
            raise SessionNotFoundError(session_id)
        return entry

    def close(self, session_id: str) -> bool:
        with self._lock:
            entry = self._entries.pop(session_id, None)
        if entry is None:
            return False
        logger.info(f"Closed study session {session_id}")
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Singleton instance
_session_registry: Optional[SessionRegistry] = None


def get_session_registry() -> SessionRegistry:
    """Get or create session registry singleton"""
    global _session_registry
    if _session_registry is None:
        _session_registry = SessionRegistry()
    return _session_registry
