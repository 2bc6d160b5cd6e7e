"""Tests for token issuance and validation."""

from datetime import timedelta

import pytest
from jose import jwt

from authgate.config import get_settings
from authgate.errors import ExpiredToken, InvalidToken
from authgate.services.tokens import (
    create_access_token,
    create_pending_token,
    create_token,
    create_verified_token,
    decode_access_token,
    verify_token,
)


class TestVerifyToken:
    """Tests for verify_token."""

    def test_round_trip_claims(self):
        token = create_token({"email": "a@x.com"}, timedelta(minutes=5))
        claims = verify_token(token)
        assert claims["email"] == "a@x.com"
        assert claims["exp"] > claims["iat"]

    def test_expired(self):
        token = create_token({"email": "a@x.com"}, timedelta(seconds=-10))
        with pytest.raises(ExpiredToken):
            verify_token(token)

    def test_expired_is_invalid_token(self):
        """ExpiredToken is a kind of InvalidToken."""
        token = create_token({"email": "a@x.com"}, timedelta(seconds=-10))
        with pytest.raises(InvalidToken):
            verify_token(token)

    def test_bad_signature(self):
        settings = get_settings()
        token = jwt.encode({"email": "a@x.com"}, "not-the-secret", algorithm=settings.jwt_algorithm)
        with pytest.raises(InvalidToken):
            verify_token(token)

    def test_malformed(self):
        with pytest.raises(InvalidToken):
            verify_token("definitely.not.ajwt")

    def test_decode_access_token_returns_none_on_failure(self):
        assert decode_access_token("garbage") is None


def test_tokens_are_unique():
    """Two tokens for the same claims differ even when minted together."""
    assert create_pending_token("a@x.com") != create_pending_token("a@x.com")


def test_token_lifetimes():
    settings = get_settings()
    pending = verify_token(create_pending_token("a@x.com"))
    verified = verify_token(create_verified_token("a@x.com"))
    session = verify_token(create_access_token(7, "a@x.com"))

    assert pending["exp"] - pending["iat"] == settings.pending_token_minutes * 60
    assert verified["exp"] - verified["iat"] == settings.verified_token_minutes * 60
    assert session["exp"] - session["iat"] == settings.jwt_expiration_minutes * 60


def test_session_claims():
    claims = verify_token(create_access_token(42, "a@x.com"))
    assert claims["userId"] == 42
    assert claims["sub"] == "42"
    assert claims["email"] == "a@x.com"


def test_handshake_claims_have_no_user():
    for token in (create_pending_token("a@x.com"), create_verified_token("a@x.com")):
        claims = verify_token(token)
        assert "userId" not in claims
        assert "sub" not in claims
