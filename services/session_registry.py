"""
Thread-safe registry of authenticated sessions.

The Flask session cookie only carries an opaque session id. The AuthSession
(and with it the bearer token) stays in process memory and is gone when the
process exits; nothing is persisted.

Bounded size:
    - Entries unused for longer than max_idle_seconds are evicted
    - When max_sessions is reached, the least recently used entry is evicted
    - Logout discards the entry outright

Thread Safety:
    - Uses threading.Lock for all operations
    - get_or_create() is atomic, so two requests from the same browser
      always resolve to the same AuthSession
"""

from __future__ import annotations

import threading
import time
import uuid
from typing import Callable, Dict, Optional

from core.session import AuthSession
from logging_config import get_logger, get_session_logger


# Module logger
logger = get_logger(__name__)

DEFAULT_MAX_IDLE_SECONDS = 3600.0
DEFAULT_MAX_SESSIONS = 1000


class SessionRegistry:
    """
    Map of session id -> AuthSession.

    Only login should create entries; read-only lookups use get().

    Usage:
        session_id, auth_session = registry.get_or_create(flask_session.get("sid"))
        flask_session["sid"] = session_id
    """

    def __init__(
        self,
        max_idle_seconds: float = DEFAULT_MAX_IDLE_SECONDS,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize empty registry.

        Args:
            max_idle_seconds: Evict sessions unused for longer than this
            max_sessions: Upper bound on stored sessions
            clock: Monotonic time source (tests inject a fake)
        """
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self._sessions: Dict[str, AuthSession] = {}
        self._last_used: Dict[str, float] = {}
        self._max_idle_seconds = max_idle_seconds
        self._max_sessions = max_sessions
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, session_id: Optional[str]) -> Optional[AuthSession]:
        """
        Look up a session without creating one.

        Args:
            session_id: Id from the session cookie

        Returns:
            AuthSession if known and not expired, None otherwise
        """
        if not session_id:
            return None
        with self._lock:
            now = self._clock()
            auth_session = self._sessions.get(session_id)
            if auth_session is None:
                return None
            if self._is_expired(session_id, now):
                self._remove(session_id)
                logger.debug(f"Session {session_id[:8]} expired")
                return None
            self._last_used[session_id] = now
            return auth_session

    def get_or_create(self, session_id: Optional[str]) -> tuple:
        """
        Return the session for an id, creating a fresh one if unknown.

        Args:
            session_id: Id from the session cookie (may be None)

        Returns:
            (session_id, AuthSession) - the id is new if one was created
        """
        with self._lock:
            now = self._clock()
            self._evict_expired(now)

            if session_id and session_id in self._sessions:
                self._last_used[session_id] = now
                return session_id, self._sessions[session_id]

            while len(self._sessions) >= self._max_sessions:
                oldest = min(self._last_used, key=self._last_used.get)
                self._remove(oldest)
                logger.info(f"Session registry full, evicted {oldest[:8]}")

            new_id = str(uuid.uuid4())
            auth_session = AuthSession(new_id, logger=get_session_logger(new_id))
            self._sessions[new_id] = auth_session
            self._last_used[new_id] = now
            logger.debug(f"Created session {new_id[:8]}")
            return new_id, auth_session

    def discard(self, session_id: Optional[str]) -> bool:
        """
        Remove a session.

        Returns:
            True if a session was removed
        """
        if not session_id:
            return False
        with self._lock:
            removed = self._remove(session_id) is not None
        if removed:
            logger.debug(f"Discarded session {session_id[:8]}")
        return removed

    def clear(self) -> int:
        """
        Remove all sessions.

        Returns:
            Number of sessions removed
        """
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
            self._last_used.clear()
            logger.info(f"Cleared {count} sessions from registry")
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    # Callers must hold self._lock

    def _is_expired(self, session_id: str, now: float) -> bool:
        return now - self._last_used.get(session_id, now) > self._max_idle_seconds

    def _remove(self, session_id: str) -> Optional[AuthSession]:
        self._last_used.pop(session_id, None)
        return self._sessions.pop(session_id, None)

    def _evict_expired(self, now: float) -> None:
        expired = [sid for sid in self._sessions if self._is_expired(sid, now)]
        for sid in expired:
            self._remove(sid)
        if expired:
            logger.debug(f"Evicted {len(expired)} idle sessions")
