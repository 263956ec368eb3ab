"""Audit sinks for login and logout events."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class AuditAction(Enum):
    LOGIN = "login"
    LOGOUT = "logout"


@dataclass
class AuditEvent:
    """Audit event record."""

    actor_id: str
    action: AuditAction
    success: bool
    detail: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class AuditSink(ABC):
    """Append-only record of authentication events."""

    @abstractmethod
    async def record(
        self,
        actor_id: str,
        action: AuditAction,
        success: bool,
        detail: str | None = None,
    ) -> None: ...


class BufferedAuditSink(AuditSink):
    """Keeps events in memory until flushed."""

    def __init__(self) -> None:
        self._buffer: list[AuditEvent] = []

    async def record(
        self,
        actor_id: str,
        action: AuditAction,
        success: bool,
        detail: str | None = None,
    ) -> None:
        self._buffer.append(
            AuditEvent(actor_id=actor_id, action=action, success=success, detail=detail)
        )

    async def flush(self) -> list[AuditEvent]:
        result = list(self._buffer)
        self._buffer.clear()
        return result


class LoggingAuditSink(AuditSink):
    """Writes each event to the structured log."""

    async def record(
        self,
        actor_id: str,
        action: AuditAction,
        success: bool,
        detail: str | None = None,
    ) -> None:
        logger.info(
            "audit",
            actor_id=actor_id,
            action=action.value,
            success=success,
            detail=detail,
        )
