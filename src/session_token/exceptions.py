"""session-token error types."""

from __future__ import annotations


class SessionTokenError(Exception):
    """Base class for session-token errors."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ConfigurationError(SessionTokenError):
    """Malformed or missing configuration. Raised at startup."""


class SigningError(SessionTokenError):
    """The signing key could not produce a token."""


class CacheUnavailableError(SessionTokenError):
    """The session cache failed to serve a request."""


class ErrorCodes:
    """Error code constants."""

    INVALID_SECRET: str = "INVALID_SECRET"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
    SIGNING_FAILED: str = "SIGNING_FAILED"
    CACHE_UNAVAILABLE: str = "CACHE_UNAVAILABLE"
    SERIALIZATION: str = "SERIALIZATION_ERROR"
