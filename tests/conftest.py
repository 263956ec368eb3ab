"""Shared fixtures."""

from __future__ import annotations

import base64
from datetime import datetime, timedelta, timezone

import pytest
from session_token.audit import BufferedAuditSink
from session_token.keys import SigningKey
from session_token.memory import InMemoryCacheClient
from session_token.service import TokenService

SECRET = base64.b64encode(b"k" * 32).decode("ascii")
OTHER_SECRET = base64.b64encode(b"o" * 32).decode("ascii")


class FakeClock:
    """Drives both the cache TTL clock and the session timestamps."""

    def __init__(self) -> None:
        self._offset = 0.0
        self._start = datetime(2030, 1, 1, tzinfo=timezone.utc)

    def monotonic(self) -> float:
        return 1000.0 + self._offset

    def now(self) -> datetime:
        return self._start + timedelta(seconds=self._offset)

    def advance(self, seconds: float) -> None:
        self._offset += seconds


@pytest.fixture
def key() -> SigningKey:
    return SigningKey.from_secret(SECRET)


@pytest.fixture
def other_key() -> SigningKey:
    return SigningKey.from_secret(OTHER_SECRET)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> InMemoryCacheClient:
    return InMemoryCacheClient(clock=clock.monotonic)


@pytest.fixture
def audit() -> BufferedAuditSink:
    return BufferedAuditSink()


@pytest.fixture
def service(
    key: SigningKey, cache: InMemoryCacheClient, audit: BufferedAuditSink, clock: FakeClock
) -> TokenService:
    return TokenService(key, cache, audit, expire_seconds=2, now=clock.now)
