"""Token service: signed tokens bound to cached sessions.

A token carries nothing but the session id. Trust rests on two checks, a
valid signature and a live cache entry, so deleting the entry revokes the
token at once even though its signature still verifies.

The service holds no mutable state besides its collaborators and is meant to
be shared by all request handlers. Cache calls are not locked: a refresh
racing an invalidate on the same id is last-write-wins.
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import structlog

from .audit import AuditAction, AuditSink
from .cache import CacheClient
from .codec import TokenCodec
from .exceptions import CacheUnavailableError, ConfigurationError, ErrorCodes
from .keys import SigningKey
from .models import Identity, IssuedToken, Session, TokenClaims

logger = structlog.get_logger(__name__)

DEFAULT_KEY_PREFIX = "tokens:"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues, resolves, refreshes and invalidates session tokens."""

    def __init__(
        self,
        key: SigningKey,
        cache: CacheClient,
        audit: AuditSink,
        expire_seconds: int,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        lifetime_seconds: int | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Args:
            key: signing key, built once at startup
            cache: session store
            audit: login/logout event sink
            expire_seconds: session TTL, reset by every refresh
            key_prefix: namespace for cache keys
            lifetime_seconds: if set, tokens also carry an exp claim this many
                seconds after issue and stop verifying after it, refreshed or not
            now: clock for session timestamps
        """
        if expire_seconds <= 0:
            raise ConfigurationError(
                code=ErrorCodes.VALIDATION,
                message=f"expire_seconds must be positive, got {expire_seconds}",
            )
        self._codec = TokenCodec(key)
        self._cache = cache
        self._audit = audit
        self._expire_seconds = expire_seconds
        self._key_prefix = key_prefix
        self._lifetime_seconds = lifetime_seconds
        self._now = now

    @property
    def expire_seconds(self) -> int:
        return self._expire_seconds

    def session_key(self, session_id: str) -> str:
        """Cache key for a session id."""
        return f"{self._key_prefix}{session_id}"

    async def issue(self, identity: Identity) -> IssuedToken:
        """Start a session for identity and return its signed token.

        Raises:
            SigningError: the token could not be signed. Nothing is cached or
                audited in that case.
            CacheUnavailableError: the session could not be stored.
        """
        session_id = str(uuid.uuid4())
        now = self._now()
        expires_at = None
        if self._lifetime_seconds is not None:
            expires_at = int(now.timestamp()) + self._lifetime_seconds
        token = self._codec.encode(TokenClaims(session_id=session_id, expires_at=expires_at))

        session = Session(
            id=session_id,
            identity=identity,
            login_time=now,
            expire_time=now + timedelta(seconds=self._expire_seconds),
        )
        await self._store(session)
        await self._audit.record(identity.user_id, AuditAction.LOGIN, True)
        logger.info("Session issued", session_id=session_id, user_id=identity.user_id)
        return IssuedToken(token=token, session=session)

    async def refresh(self, session: Session) -> Session:
        """Restart the session's TTL window from now and store it again."""
        now = self._now()
        session.login_time = now
        session.expire_time = now + timedelta(seconds=self._expire_seconds)
        await self._store(session)
        logger.debug("Session refreshed", session_id=session.id)
        return session

    async def resolve(self, token: str | None) -> Session | None:
        """Return the live session a token names, or None.

        Blank tokens, tokens that fail verification and tokens whose session
        is gone all give None.

        Raises:
            CacheUnavailableError: the cache could not be read.
        """
        session_id = self._session_id(token)
        if session_id is None:
            return None
        return await self._load(session_id)

    async def invalidate(self, token: str | None) -> bool:
        """End the session a token names. False if there was none.

        Raises:
            CacheUnavailableError: the cache could not be read or written.
        """
        session_id = self._session_id(token)
        if session_id is None:
            return False
        session = await self._load(session_id)
        if session is None:
            return False
        # A concurrent invalidate may have deleted it since the load.
        if not await self._cache.delete(self.session_key(session_id)):
            return False
        await self._audit.record(session.identity.user_id, AuditAction.LOGOUT, True)
        logger.info(
            "Session invalidated", session_id=session_id, user_id=session.identity.user_id
        )
        return True

    def _session_id(self, token: str | None) -> str | None:
        result = self._codec.decode(token)
        if not result.ok or result.claims is None:
            return None
        return result.claims.session_id

    async def _store(self, session: Session) -> None:
        await self._cache.set(
            self.session_key(session.id), session.to_json(), self._expire_seconds
        )

    async def _load(self, session_id: str) -> Session | None:
        data = await self._cache.get(self.session_key(session_id))
        if data is None:
            return None
        try:
            return Session.from_json(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise CacheUnavailableError(
                code=ErrorCodes.SERIALIZATION,
                message=f"Cached session {session_id} is unreadable",
                cause=e,
            ) from e
