"""
Redis Session Backend

This module provides the Redis-backed implementation of SessionBackend for
Starlette/FastAPI requests.

Each session is a SessionRecord stored as JSON under
``{session_key_prefix}{session_id}`` with a TTL refreshed on every write.
The session id travels in a cookie. While a session is open, its
``{session_key_prefix}{session_id}:lock`` key is held so concurrent requests
for the same client are serialised: open acquires, close releases.

Pattern: Repository pattern for the session record
Pattern: Dependency injection for Redis client, request and response
"""

import asyncio
import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from redis.asyncio import Redis
from starlette.requests import Request
from starlette.responses import Response

from session_facade.core.config import Settings, get_settings
from session_facade.core.exceptions import ProgrammerError, SessionLockError
from session_facade.models.domain import CookieScope, SessionRecord
from session_facade.observability.logging import get_logger
from session_facade.sessions.backend import SessionBackend


logger = get_logger(__name__)

# Expired cookies are dated this far in the past
COOKIE_EXPIRY_OFFSET_SECONDS = 43200


def _short_id(session_id: str) -> str:
    """Truncate a session id for logging."""
    return session_id[:8]


class RedisSessionBackend(SessionBackend):
    """
    Redis-based session backend bound to one request/response pair.

    Attributes:
        _redis: The async Redis client instance.
        _request: Incoming request (session cookie, host name).
        _response: Outgoing response (Set-Cookie headers).
        _settings: Cookie, TTL and lock configuration.

    Example:
        >>> backend = RedisSessionBackend(redis_client, request, response)
        >>> await backend.start_or_resume()
        >>> backend.values["cart"] = [1, 2]
        >>> await backend.write_and_release()
    """

    def __init__(
        self,
        redis_client: Redis,
        request: Request,
        response: Response,
        settings: Optional[Settings] = None,
    ) -> None:
        self._redis: Redis = redis_client
        self._request = request
        self._response = response
        self._settings = settings or get_settings()

        self._cookie_scope = CookieScope(
            lifetime_seconds=self._settings.cookie_lifetime_seconds,
            path=self._settings.cookie_path,
            domain=self._settings.cookie_domain,
        )
        self._scope_changed = False

        self._session_id: Optional[str] = None
        self._record: Optional[SessionRecord] = None
        self._lock_token: Optional[str] = None

    # =========================================================================
    # Keys
    # =========================================================================

    def _record_key(self, session_id: str) -> str:
        return f"{self._settings.session_key_prefix}{session_id}"

    def _lock_key(self, session_id: str) -> str:
        return f"{self._settings.session_key_prefix}{session_id}:lock"

    @property
    def session_id(self) -> Optional[str]:
        """Id issued or resumed by this backend; kept across close, cleared by destroy."""
        return self._session_id

    # =========================================================================
    # Locking
    # =========================================================================

    async def _acquire_lock(self, session_id: str) -> None:
        """
        Acquire the per-session lock, polling until the configured timeout.

        Raises:
            SessionLockError: If another holder keeps the lock past the timeout.
        """
        token = secrets.token_hex(16)
        lock_key = self._lock_key(session_id)
        deadline = time.monotonic() + self._settings.lock_timeout_seconds

        while True:
            acquired = await self._redis.set(
                lock_key, token, nx=True, ex=self._settings.lock_ttl_seconds
            )
            if acquired:
                self._lock_token = token
                logger.debug("session_lock_acquired", session_id=_short_id(session_id))
                return
            if time.monotonic() >= deadline:
                raise SessionLockError(
                    f"Session {_short_id(session_id)} is locked by another holder",
                    session_id=session_id,
                    timeout_seconds=self._settings.lock_timeout_seconds,
                )
            await asyncio.sleep(self._settings.lock_poll_interval_seconds)

    async def _release_lock(self, session_id: str) -> None:
        """Release the lock if it is still held with this backend's token."""
        if self._lock_token is None:
            return

        lock_key = self._lock_key(session_id)
        current = await self._redis.get(lock_key)
        if isinstance(current, bytes):
            current = current.decode("utf-8")
        if current == self._lock_token:
            await self._redis.delete(lock_key)
        self._lock_token = None

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    async def start_or_resume(self) -> None:
        """
        Resume the session named by the request cookie, or start a new one.

        An id this backend already issued or resumed takes precedence, so a
        session closed and reopened within one request stays the same. Ids
        the store does not know are never adopted; a fresh id is issued
        instead.
        """
        session_id = self._session_id or self._request.cookies.get(self.cookie_name)
        record: Optional[SessionRecord] = None

        if session_id:
            await self._acquire_lock(session_id)
            raw = await self._redis.get(self._record_key(session_id))
            if raw is not None:
                record = SessionRecord.model_validate_json(raw)
            else:
                await self._release_lock(session_id)

        if record is not None:
            self._session_id = record.id
            self._record = record
            logger.info(
                "session_resumed",
                session_id=_short_id(record.id),
                key_count=len(record.values),
            )
            if self._scope_changed:
                self._issue_cookie(record.id)
            return

        new_id = secrets.token_urlsafe(32)
        await self._acquire_lock(new_id)
        self._session_id = new_id
        self._record = SessionRecord(id=new_id)
        self._issue_cookie(new_id)
        logger.info("session_started", session_id=_short_id(new_id))

    async def write_and_release(self) -> None:
        """
        Save the record with a refreshed TTL, then release the lock.

        The lock is released even when the save fails; the Redis error is
        re-raised to the caller.
        """
        if self._record is None:
            return

        record = self._record
        self._record = None
        record.updated_at = datetime.now(timezone.utc)
        try:
            await self._redis.setex(
                self._record_key(record.id),
                self._settings.session_ttl_seconds,
                record.model_dump_json(),
            )
        finally:
            await self._release_lock(record.id)
        logger.info(
            "session_written",
            session_id=_short_id(record.id),
            key_count=len(record.values),
        )

    async def destroy_session(self) -> None:
        """Delete the stored record and release the lock."""
        if self._record is None:
            return

        session_id = self._record.id
        await self._redis.delete(self._record_key(session_id))
        await self._release_lock(session_id)
        self._session_id = None
        self._record = None
        logger.info("session_deleted", session_id=_short_id(session_id))

    # =========================================================================
    # Value map
    # =========================================================================

    @property
    def values(self) -> dict[str, Any]:
        if self._record is None:
            raise ProgrammerError(
                "RedisSessionBackend.start_or_resume() must be called before "
                "accessing session values",
                operation="RedisSessionBackend.values",
            )
        return self._record.values

    # =========================================================================
    # Cookie transport
    # =========================================================================

    @property
    def cookie_name(self) -> str:
        return self._settings.cookie_name

    def set_cookie_scope(
        self, lifetime_seconds: int, path: str, domain: Optional[str]
    ) -> None:
        self._cookie_scope = CookieScope(
            lifetime_seconds=lifetime_seconds, path=path, domain=domain
        )
        self._scope_changed = True

    def get_cookie_scope(self) -> CookieScope:
        return self._cookie_scope

    def has_request_cookie(self) -> bool:
        return self.cookie_name in self._request.cookies

    def expire_cookie(self, name: str, path: str, domain: Optional[str]) -> None:
        expires = datetime.now(timezone.utc) - timedelta(
            seconds=COOKIE_EXPIRY_OFFSET_SECONDS
        )
        self._response.set_cookie(
            name,
            "",
            expires=expires,
            path=path,
            domain=domain,
        )

    def request_host(self) -> str:
        return self._request.url.hostname or ""

    def _issue_cookie(self, session_id: str) -> None:
        scope = self._cookie_scope
        self._scope_changed = False
        self._response.set_cookie(
            self.cookie_name,
            session_id,
            max_age=scope.lifetime_seconds or None,
            path=scope.path,
            domain=scope.domain,
            secure=self._settings.cookie_secure,
            httponly=self._settings.cookie_httponly,
            samesite=self._settings.cookie_samesite,
        )
