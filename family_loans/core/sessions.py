"""
Server-held login sessions.

A session binds an opaque cookie token to one tenant for a fixed
lifetime (no sliding renewal). Sessions live in a SessionStore; the
default store is in-process memory, so restarting the server logs
everyone out.
"""

import logging
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock
from typing import Callable

from family_loans.core.exceptions import SessionException, UnauthorizedException
from family_loans.core.security import decode_session_token, encode_session_token
from family_loans.models.base import utc_now
from family_loans.models.tenant_context import TenantContext

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class SessionRecord:
    """What the server remembers about one session"""

    context: TenantContext
    expires_at: datetime


class SessionStore(ABC):
    """Key-value store for sessions with per-key time-to-live"""

    @abstractmethod
    def put(self, session_id: str, record: SessionRecord, ttl: timedelta) -> None:
        """Store a session, replacing any existing one with the same id"""

    @abstractmethod
    def get(self, session_id: str) -> SessionRecord | None:
        """Return the session, or None if missing or expired"""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove a session. Deleting a missing id is a no-op."""


class InMemorySessionStore(SessionStore):
    """Thread-safe dict-backed store; expired entries are dropped on read and on every put"""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._entries: dict[str, tuple[SessionRecord, datetime]] = {}
        self._lock = Lock()

    def put(self, session_id: str, record: SessionRecord, ttl: timedelta) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries[session_id] = (record, now + ttl)

    def _purge_expired(self, now: datetime) -> None:
        """Drop sessions whose cookie was never sent back. Caller holds the lock."""
        expired = [sid for sid, (_, evict_at) in self._entries.items() if evict_at <= now]
        for session_id in expired:
            del self._entries[session_id]
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))

    def get(self, session_id: str) -> SessionRecord | None:
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                return None
            record, evict_at = entry
            if evict_at <= self._clock():
                del self._entries[session_id]
                return None
            return record

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._entries.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._entries)


class SessionAuthority:
    """
    Issues, validates and destroys session tokens.

    validate() never raises for a bad or missing token; it returns None
    and callers decide how to respond.
    """

    def __init__(self, store: SessionStore, ttl: timedelta, clock: Clock = utc_now):
        self.store = store
        self.ttl = ttl
        self._clock = clock

    def create(self, context: TenantContext) -> str:
        """
        Start a session for an authenticated tenant.

        Args:
            context: Tenant the session is bound to

        Returns:
            Cookie token for the new session
        """
        session_id = secrets.token_urlsafe(32)
        expires_at = self._clock() + self.ttl
        self.store.put(session_id, SessionRecord(context=context, expires_at=expires_at), self.ttl)
        logger.debug("Session created for tenant %s", context.tenant_id)
        return encode_session_token(session_id, expires_at)

    def validate(self, token: str | None) -> TenantContext | None:
        """Return the tenant bound to token, or None if there is no live session"""
        if not token:
            return None
        try:
            session_id = decode_session_token(token)
        except UnauthorizedException as e:
            logger.debug("Rejected session token: %s", e)
            return None

        record = self.store.get(session_id)
        if record is None or record.expires_at <= self._clock():
            return None
        return record.context

    def destroy(self, token: str | None) -> None:
        """
        End a session.

        Unknown, expired or unreadable tokens have nothing to remove and
        succeed silently.

        Raises:
            SessionException: If the store fails to delete the session
        """
        if not token:
            return
        try:
            session_id = decode_session_token(token)
        except UnauthorizedException:
            return

        try:
            self.store.delete(session_id)
        except Exception as e:
            logger.exception("Failed to destroy session")
            raise SessionException("Error logging out") from e
