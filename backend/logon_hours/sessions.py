from __future__ import annotations

import threading
import time
from typing import Callable
from uuid import uuid4

from .builder import ScheduleBuilder
from .errors import SessionNotFound
from .logger import get_logger

logger = get_logger(__name__)


class SessionStore:
    """In-process configuration sessions, each owning one ScheduleBuilder.

    Sessions idle for longer than ``ttl_seconds`` are dropped, and creating a
    session beyond ``max_sessions`` evicts the least recently used one.
    """

    def __init__(
        self,
        ttl_seconds: float = 1800,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self._clock = clock
        self._lock = threading.Lock()
        # insertion order doubles as least-recently-used order
        self._sessions: dict[str, tuple[ScheduleBuilder, float]] = {}

    def _purge_expired(self, now: float) -> None:
        expired = [
            session_id
            for session_id, (_, last_used) in self._sessions.items()
            if now - last_used > self.ttl_seconds
        ]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.info("Dropped %d idle sessions", len(expired))

    def create(self) -> str:
        session_id = uuid4().hex
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            while len(self._sessions) >= self.max_sessions:
                oldest = next(iter(self._sessions))
                del self._sessions[oldest]
                logger.warning("Session limit reached; evicted %s", oldest)
            self._sessions[session_id] = (ScheduleBuilder(), now)
        return session_id

    def get(self, session_id: str) -> ScheduleBuilder:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            try:
                builder, _ = self._sessions.pop(session_id)
            except KeyError:
                raise SessionNotFound(f"Session {session_id!r} not found") from None
            self._sessions[session_id] = (builder, now)
            return builder

    def discard(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFound(f"Session {session_id!r} not found")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
