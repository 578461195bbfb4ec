from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from pdfcrop import config
from pdfcrop.session import CropSession

log = logging.getLogger(__name__)


class SessionStore:
    """In-memory sessions keyed by id. Nothing survives a restart.

    Sessions idle for longer than ``ttl`` seconds are evicted, and creating a
    session beyond ``max_sessions`` evicts the least recently used one.
    Evicted sessions are reset so their artifacts are revoked. A ``ttl`` of
    0 or less disables idle expiry.
    """

    def __init__(
        self,
        locale: str | None = None,
        module_name: str | None = None,
        ttl: float | None = None,
        max_sessions: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.locale = locale
        self.module_name = module_name
        self.ttl = config.SESSION_TTL if ttl is None else ttl
        self.max_sessions = config.MAX_SESSIONS if max_sessions is None else max_sessions
        self._clock = clock
        self._sessions: dict[str, CropSession] = {}
        # Ordered least recently used first.
        self._last_seen: dict[str, float] = {}

    def _touch(self, session_id: str) -> None:
        self._last_seen.pop(session_id, None)
        self._last_seen[session_id] = self._clock()

    def _evict(self, session_id: str, reason: str) -> None:
        session = self._sessions.pop(session_id)
        self._last_seen.pop(session_id, None)
        session.reset()
        log.info("Evicted session %s (%s)", session_id, reason)

    def prune(self) -> int:
        """Evict sessions idle past the ttl. Returns how many were evicted."""
        if self.ttl <= 0:
            return 0
        now = self._clock()
        expired = [sid for sid, seen in self._last_seen.items() if now - seen > self.ttl]
        for session_id in expired:
            self._evict(session_id, "idle")
        return len(expired)

    def create(self) -> tuple[str, CropSession]:
        self.prune()
        while self._sessions and len(self._sessions) >= self.max_sessions:
            self._evict(next(iter(self._last_seen)), "capacity")

        session_id = uuid.uuid4().hex[:12]
        session = CropSession(locale=self.locale, module_name=self.module_name)
        self._sessions[session_id] = session
        self._touch(session_id)
        log.info("Created session %s", session_id)
        return session_id, session

    def get(self, session_id: str) -> CropSession | None:
        self.prune()
        session = self._sessions.get(session_id)
        if session is not None:
            self._touch(session_id)
        return session

    def remove(self, session_id: str) -> bool:
        """Reset and forget a session, releasing its artifact."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        self._last_seen.pop(session_id, None)
        session.reset()
        log.info("Removed session %s", session_id)
        return True

    def __len__(self) -> int:
        return len(self._sessions)
