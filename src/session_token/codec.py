"""Session token encoding and verification."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Any

import jwt
import structlog

from .exceptions import ErrorCodes, SigningError
from .keys import SigningKey
from .models import TokenClaims

logger = structlog.get_logger(__name__)

# Clients without a token sometimes send the string "null".
_NULL_TOKEN = "null"


class DecodeStatus(Enum):
    """Outcome of decoding a token."""

    OK = "ok"
    EMPTY = "empty"
    EXPIRED = "expired"
    SIGNATURE_MISMATCH = "signature_mismatch"
    MALFORMED = "malformed"
    MISSING_CLAIM = "missing_claim"


@dataclass(frozen=True)
class DecodeResult:
    """Decoded claims, or the reason there are none."""

    status: DecodeStatus
    claims: TokenClaims | None = None

    @property
    def ok(self) -> bool:
        return self.status is DecodeStatus.OK


def fingerprint(token: str) -> str:
    """Short hash of a token, safe to put in logs."""
    return hashlib.sha256(token.encode("utf-8", "surrogatepass")).hexdigest()[:16]


class TokenCodec:
    """Signs and verifies session tokens with a single key."""

    def __init__(self, key: SigningKey) -> None:
        self._key = key

    def encode(self, claims: TokenClaims) -> str:
        """Sign claims into a compact JWT.

        Raises:
            SigningError: the key or claims could not be signed.
        """
        try:
            return jwt.encode(
                claims.to_payload(),
                self._key.material,
                algorithm=self._key.algorithm,
            )
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise SigningError(
                code=ErrorCodes.SIGNING_FAILED,
                message=f"Failed to sign session token: {e}",
                cause=e,
            ) from e

    def decode(self, token: str | None) -> DecodeResult:
        """Verify a token and extract its claims. Never raises."""
        if token is None or not token.strip() or token == _NULL_TOKEN:
            return DecodeResult(DecodeStatus.EMPTY)

        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._key.material,
                algorithms=[self._key.algorithm],
            )
        except jwt.ExpiredSignatureError:
            logger.info("Session token expired", token=fingerprint(token))
            return DecodeResult(DecodeStatus.EXPIRED)
        except jwt.InvalidSignatureError:
            logger.debug("Session token signature mismatch", token=fingerprint(token))
            return DecodeResult(DecodeStatus.SIGNATURE_MISMATCH)
        except (jwt.InvalidTokenError, UnicodeError) as e:
            # UnicodeError: lone surrogates cannot be encoded for verification.
            logger.debug(
                "Session token malformed", token=fingerprint(token), error=str(e)
            )
            return DecodeResult(DecodeStatus.MALFORMED)

        session_id = payload.get("sid")
        if not isinstance(session_id, str) or not session_id:
            logger.debug("Session token has no session id", token=fingerprint(token))
            return DecodeResult(DecodeStatus.MISSING_CLAIM)

        exp = payload.get("exp")
        return DecodeResult(
            DecodeStatus.OK,
            TokenClaims(session_id=session_id, expires_at=int(exp) if exp is not None else None),
        )
