"""Builds a TokenService from configuration."""

from __future__ import annotations

from .audit import AuditSink, BufferedAuditSink, LoggingAuditSink
from .cache import CacheClient
from .config import AuditSection, CacheSection, SessionTokenConfig
from .keys import SigningKey
from .memory import InMemoryCacheClient
from .redis_cache import RedisCacheClient
from .service import TokenService


def build_cache(section: CacheSection) -> CacheClient:
    if section.backend == "redis":
        return RedisCacheClient(
            section.redis.url, socket_timeout=section.redis.socket_timeout
        )
    return InMemoryCacheClient()


def build_audit_sink(section: AuditSection) -> AuditSink:
    if section.backend == "buffered":
        return BufferedAuditSink()
    return LoggingAuditSink()


def build_token_service(
    config: SessionTokenConfig,
    *,
    cache: CacheClient | None = None,
    audit: AuditSink | None = None,
) -> TokenService:
    """Decode the signing key and assemble the service.

    Call once at startup; a malformed secret raises ConfigurationError here
    rather than on the first request.
    """
    key = SigningKey.from_secret(config.token.jwt_secret)
    return TokenService(
        key,
        cache if cache is not None else build_cache(config.cache),
        audit if audit is not None else build_audit_sink(config.audit),
        config.token.expire_seconds,
        key_prefix=config.token.key_prefix,
        lifetime_seconds=config.token.lifetime_seconds,
    )
