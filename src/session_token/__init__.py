"""session-token library."""

from .audit import AuditAction, AuditEvent, AuditSink, BufferedAuditSink, LoggingAuditSink
from .cache import CacheClient
from .codec import DecodeResult, DecodeStatus, TokenCodec
from .config import SessionTokenConfig, load
from .exceptions import (
    CacheUnavailableError,
    ConfigurationError,
    ErrorCodes,
    SessionTokenError,
    SigningError,
)
from .factory import build_token_service
from .keys import SigningKey
from .logger import configure_logging
from .memory import InMemoryCacheClient
from .models import Identity, IssuedToken, Session, TokenClaims
from .redis_cache import RedisCacheClient
from .service import TokenService

__all__ = [
    "AuditAction",
    "AuditEvent",
    "AuditSink",
    "BufferedAuditSink",
    "LoggingAuditSink",
    "CacheClient",
    "InMemoryCacheClient",
    "RedisCacheClient",
    "DecodeResult",
    "DecodeStatus",
    "TokenCodec",
    "SessionTokenConfig",
    "load",
    "configure_logging",
    "SessionTokenError",
    "ConfigurationError",
    "SigningError",
    "CacheUnavailableError",
    "ErrorCodes",
    "SigningKey",
    "Identity",
    "IssuedToken",
    "Session",
    "TokenClaims",
    "TokenService",
    "build_token_service",
]
