"""Session and token models."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Identity:
    """Authenticated user the session belongs to."""

    user_id: str
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class Session:
    """Server-side login session, stored in the cache under its id."""

    id: str
    identity: Identity
    login_time: datetime
    expire_time: datetime

    def to_json(self) -> str:
        return json.dumps(
            {
                "id": self.id,
                "identity": {
                    "user_id": self.identity.user_id,
                    "attributes": self.identity.attributes,
                },
                "login_time": self.login_time.isoformat(),
                "expire_time": self.expire_time.isoformat(),
            },
            separators=(",", ":"),
        )

    @classmethod
    def from_json(cls, data: str) -> Session:
        raw: dict[str, Any] = json.loads(data)
        identity = raw["identity"]
        return cls(
            id=raw["id"],
            identity=Identity(
                user_id=identity["user_id"],
                attributes=identity.get("attributes") or {},
            ),
            login_time=datetime.fromisoformat(raw["login_time"]),
            expire_time=datetime.fromisoformat(raw["expire_time"]),
        )


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a session token.

    ``session_id`` is written as the ``sid`` claim. ``expires_at`` maps to the
    registered ``exp`` claim and is only set when tokens have a lifetime of
    their own.
    """

    session_id: str
    expires_at: int | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"sid": self.session_id}
        if self.expires_at is not None:
            payload["exp"] = self.expires_at
        return payload


@dataclass(frozen=True)
class IssuedToken:
    """Signed token handed to the client at login."""

    token: str
    session: Session

    @property
    def login_time(self) -> datetime:
        return self.session.login_time
