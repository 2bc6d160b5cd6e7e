"""Signed bearer token issuance and validation."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from authgate.config import get_settings
from authgate.errors import ExpiredToken, InvalidToken

settings = get_settings()


def create_token(claims: dict[str, Any], expires_delta: timedelta) -> str:
    """Sign ``claims`` into a JWT that expires after ``expires_delta``."""
    now = datetime.now(UTC)
    to_encode = dict(claims)
    # jti keeps two tokens minted in the same second for the same claims distinct
    to_encode.update({"iat": now, "exp": now + expires_delta, "jti": uuid.uuid4().hex})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict[str, Any]:
    """Decode a JWT, checking signature and expiry.

    Raises ExpiredToken when the token is past its expiry and InvalidToken for
    any other decoding failure.
    """
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise ExpiredToken() from e
    except JWTError as e:
        raise InvalidToken() from e


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        return verify_token(token)
    except InvalidToken:
        return None


def create_pending_token(email: str) -> str:
    """Token proving a code was issued for ``email``."""
    return create_token({"email": email}, timedelta(minutes=settings.pending_token_minutes))


def create_verified_token(email: str) -> str:
    """Token proving ownership of ``email`` was confirmed."""
    return create_token({"email": email}, timedelta(minutes=settings.verified_token_minutes))


def create_access_token(user_id: int, email: str) -> str:
    """Create a JWT access token."""
    return create_token(
        {"userId": user_id, "sub": str(user_id), "email": email},
        timedelta(minutes=settings.jwt_expiration_minutes),
    )
