"""Configuration models and YAML loader."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError, ErrorCodes


class TokenSection(BaseModel):
    """Session token settings."""

    expire_seconds: int = Field(gt=0)
    jwt_secret: str = Field(min_length=1, repr=False)
    key_prefix: str = "tokens:"
    # Unset: tokens carry no exp claim and live as long as their session.
    lifetime_seconds: int | None = Field(default=None, gt=0)


class RedisSection(BaseModel):
    """Redis connection settings."""

    url: str = "redis://localhost:6379/0"
    socket_timeout: float = Field(default=5.0, gt=0)


class CacheSection(BaseModel):
    """Session cache backend."""

    backend: Literal["memory", "redis"] = "memory"
    redis: RedisSection = Field(default_factory=RedisSection)


class AuditSection(BaseModel):
    """Audit sink backend."""

    backend: Literal["logging", "buffered"] = "logging"


class LogSection(BaseModel):
    """Log settings."""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class SessionTokenConfig(BaseModel):
    """Top-level configuration."""

    token: TokenSection
    cache: CacheSection = Field(default_factory=CacheSection)
    audit: AuditSection = Field(default_factory=AuditSection)
    log: LogSection = Field(default_factory=LogSection)


def overlay(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return base with override laid over it.

    Nested sections are combined key by key; any other value, lists included,
    is taken from override as is.
    """
    merged = {**base}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = overlay(current, value)
        merged[key] = value
    return merged


def parse(data: dict[str, Any]) -> SessionTokenConfig:
    """Validate a raw config mapping."""
    try:
        return SessionTokenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            code=ErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e


def load(base_path: Path, env_path: Path | None = None) -> SessionTokenConfig:
    """Load configuration from YAML.

    base_path: base config file (required)
    env_path: environment-specific overrides, laid over the base when the
        file exists.
    """
    sources = [base_path]
    if env_path is not None and env_path.exists():
        sources.append(env_path)

    data: dict[str, Any] = {}
    for path in sources:
        try:
            with path.open(encoding="utf-8") as stream:
                document = yaml.safe_load(stream)
        except OSError as e:
            raise ConfigurationError(
                code=ErrorCodes.READ_FILE,
                message=f"Cannot read config file {path}",
                cause=e,
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                code=ErrorCodes.PARSE_YAML,
                message=f"Config file {path} is not valid YAML",
                cause=e,
            ) from e
        if document is None:
            continue
        if not isinstance(document, dict):
            raise ConfigurationError(
                code=ErrorCodes.PARSE_YAML,
                message=f"Config file {path} must contain a mapping at the top level",
            )
        data = overlay(data, document)
    return parse(data)
