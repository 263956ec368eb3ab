"""TokenCodec unit tests."""

from __future__ import annotations

import time

import jwt
import pytest
from session_token.codec import DecodeStatus, TokenCodec, fingerprint
from session_token.keys import SigningKey
from session_token.models import TokenClaims


def test_encode_decode(key: SigningKey) -> None:
    codec = TokenCodec(key)
    token = codec.encode(TokenClaims(session_id="sess-1"))
    result = codec.decode(token)
    assert result.ok
    assert result.claims == TokenClaims(session_id="sess-1")


def test_token_is_url_safe(key: SigningKey) -> None:
    token = TokenCodec(key).encode(TokenClaims(session_id="sess-1"))
    assert token.count(".") == 2
    assert not set(token) & set("+/= ")


@pytest.mark.parametrize("token", [None, "", "  ", "null"])
def test_decode_empty(key: SigningKey, token: str | None) -> None:
    result = TokenCodec(key).decode(token)
    assert result.status is DecodeStatus.EMPTY
    assert result.claims is None


def test_decode_signature_mismatch(key: SigningKey, other_key: SigningKey) -> None:
    token = TokenCodec(other_key).encode(TokenClaims(session_id="sess-1"))
    assert TokenCodec(key).decode(token).status is DecodeStatus.SIGNATURE_MISMATCH


def test_decode_expired(key: SigningKey) -> None:
    codec = TokenCodec(key)
    token = codec.encode(TokenClaims(session_id="sess-1", expires_at=int(time.time()) - 10))
    assert codec.decode(token).status is DecodeStatus.EXPIRED


def test_decode_keeps_future_expiry(key: SigningKey) -> None:
    codec = TokenCodec(key)
    exp = int(time.time()) + 3600
    result = codec.decode(codec.encode(TokenClaims(session_id="sess-1", expires_at=exp)))
    assert result.claims == TokenClaims(session_id="sess-1", expires_at=exp)


@pytest.mark.parametrize("token", ["garbage", "a.b.c", "a.b", ".....", "a.b.c\ud800", "\udcff"])
def test_decode_malformed(key: SigningKey, token: str) -> None:
    assert TokenCodec(key).decode(token).status is DecodeStatus.MALFORMED


def test_decode_rejects_unsigned_token(key: SigningKey) -> None:
    token = jwt.encode({"sid": "sess-1"}, None, algorithm="none")
    assert TokenCodec(key).decode(token).status is DecodeStatus.MALFORMED


def test_decode_rejects_other_algorithm(key: SigningKey) -> None:
    token = jwt.encode({"sid": "sess-1"}, key.material * 2, algorithm="HS512")
    assert TokenCodec(key).decode(token).status is DecodeStatus.MALFORMED


@pytest.mark.parametrize("payload", [{}, {"sid": ""}, {"sid": 42}, {"LOGIN_USER_KEY": "x"}])
def test_decode_missing_session_id(key: SigningKey, payload: dict) -> None:
    token = jwt.encode(payload, key.material, algorithm="HS256")
    assert TokenCodec(key).decode(token).status is DecodeStatus.MISSING_CLAIM


def test_fingerprint_hides_token() -> None:
    fp = fingerprint("header.payload.signature")
    assert len(fp) == 16
    assert "payload" not in fp
    assert fingerprint("header.payload.signature") == fp


def test_fingerprint_accepts_lone_surrogates() -> None:
    assert len(fingerprint("a.b.c\ud800")) == 16
