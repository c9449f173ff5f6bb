"""Server-side session store with Redis backend and in-memory fallback.

The client only ever holds the opaque session id. Records are keyed by the
SHA-256 of that id, carry the user id, and expire after a rolling TTL that
is pushed forward every time the session is read.
"""

import secrets
import time
from uuid import UUID

from src.taskflow.core.config import get_settings
from src.taskflow.core.logging import get_logger
from src.taskflow.core.redis import get_redis
from src.taskflow.core.security import hash_token

logger = get_logger(__name__)

PREFIX_SESSION = "session"


class SessionStore:
    """Create, resolve and destroy sessions.

    Uses Redis when available. Without Redis, sessions live in this
    process only and are lost on restart.
    """

    def __init__(self, ttl_seconds: int):
        self.ttl_seconds = ttl_seconds
        self._memory: dict[str, tuple[str, float]] = {}

    @staticmethod
    def _key(session_id: str) -> str:
        return f"{PREFIX_SESSION}:{hash_token(session_id)}"

    async def create(self, user_id: UUID) -> str:
        """Start a session for ``user_id`` and return the new opaque session id."""
        session_id = secrets.token_urlsafe(32)
        key = self._key(session_id)
        redis = await get_redis()
        if redis:
            await redis.setex(key, self.ttl_seconds, str(user_id))
        else:
            self._purge_expired()
            self._memory[key] = (str(user_id), time.monotonic() + self.ttl_seconds)
        return session_id

    def _purge_expired(self) -> None:
        now = time.monotonic()
        for key in [k for k, (_, expires_at) in self._memory.items() if expires_at < now]:
            del self._memory[key]

    async def get(self, session_id: str) -> UUID | None:
        """Resolve a session id to its user id, refreshing the TTL.

        Returns None for unknown, expired, or malformed sessions.
        """
        key = self._key(session_id)
        redis = await get_redis()
        if redis:
            value = await redis.get(key)
            if value is None:
                return None
            await redis.expire(key, self.ttl_seconds)
        else:
            entry = self._memory.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at < time.monotonic():
                del self._memory[key]
                return None
            self._memory[key] = (value, time.monotonic() + self.ttl_seconds)

        try:
            return UUID(value)
        except ValueError:
            logger.warning("Discarding malformed session record")
            await self.destroy(session_id)
            return None

    async def destroy(self, session_id: str) -> None:
        """End a session. Unknown ids are ignored."""
        key = self._key(session_id)
        redis = await get_redis()
        if redis:
            await redis.delete(key)
        else:
            self._memory.pop(key, None)

    def clear_local(self) -> None:
        """Drop every in-process session (testing helper)."""
        self._memory.clear()


_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get the process-wide session store."""
    global _store
    if _store is None:
        _store = SessionStore(get_settings().session_ttl_seconds)
    return _store
