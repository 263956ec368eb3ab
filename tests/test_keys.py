"""SigningKey unit tests."""

import base64

import pytest
from session_token.exceptions import ConfigurationError, ErrorCodes
from session_token.keys import SigningKey


def test_from_secret_decodes_base64() -> None:
    secret = base64.b64encode(b"s" * 32).decode()
    key = SigningKey.from_secret(secret)
    assert key.material == b"s" * 32
    assert key.algorithm == "HS256"


def test_key_is_immutable() -> None:
    key = SigningKey.from_secret(base64.b64encode(b"s" * 32).decode())
    with pytest.raises(AttributeError):
        key.material = b"other"  # type: ignore[misc]


def test_repr_hides_material() -> None:
    key = SigningKey.from_secret(base64.b64encode(b"topsecret" * 4).decode())
    assert "topsecret" not in repr(key)


@pytest.mark.parametrize("secret", ["", "   ", "not base64!!", "abc"])
def test_from_secret_rejects_malformed(secret: str) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        SigningKey.from_secret(secret)
    assert exc_info.value.code == ErrorCodes.INVALID_SECRET


def test_short_key_is_accepted() -> None:
    key = SigningKey.from_secret(base64.b64encode(b"short").decode())
    assert key.material == b"short"
