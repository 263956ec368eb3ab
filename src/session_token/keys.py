"""HMAC signing key."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field

import structlog

from .exceptions import ConfigurationError, ErrorCodes

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"

# HS256 digest size; shorter keys still verify but weaken the MAC.
_RECOMMENDED_KEY_BYTES = 32


@dataclass(frozen=True)
class SigningKey:
    """Symmetric key used to sign and verify session tokens.

    Built once at startup with :meth:`from_secret` and handed to the
    :class:`~session_token.service.TokenService`. Tokens signed with one key
    do not verify under another, so replacing the key logs every session out.
    """

    material: bytes = field(repr=False)
    algorithm: str = ALGORITHM

    @classmethod
    def from_secret(cls, secret: str) -> SigningKey:
        """Decode a base64 secret into a signing key.

        Raises:
            ConfigurationError: the secret is empty or not valid base64.
        """
        if not secret or not secret.strip():
            raise ConfigurationError(
                code=ErrorCodes.INVALID_SECRET,
                message="Signing secret is empty",
            )
        try:
            material = base64.b64decode(secret.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError(
                code=ErrorCodes.INVALID_SECRET,
                message="Signing secret is not valid base64",
                cause=e,
            ) from e
        if not material:
            raise ConfigurationError(
                code=ErrorCodes.INVALID_SECRET,
                message="Signing secret decodes to zero bytes",
            )
        if len(material) < _RECOMMENDED_KEY_BYTES:
            logger.warning(
                "Signing key is shorter than recommended",
                key_bytes=len(material),
                recommended_bytes=_RECOMMENDED_KEY_BYTES,
            )
        return cls(material=material)
