"""Tests for error-to-response mapping."""

import pytest

from authgate.errors import (
    Conflict,
    DeliveryError,
    ErrorKind,
    ExpiredToken,
    InternalError,
    InvalidCode,
    InvalidCredentials,
    InvalidInput,
    InvalidToken,
    NotFound,
    TokenMismatch,
    Unauthorized,
    error_response,
)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (InvalidInput("Email is required"), (400, "Email is required")),
        (InvalidCode(), (400, "Invalid OTP")),
        (InvalidCredentials(), (400, "Invalid credentials")),
        (Unauthorized(), (401, "Unauthorized")),
        (TokenMismatch(), (401, "Token mismatch")),
        (InvalidToken(), (401, "Invalid token")),
        (ExpiredToken(), (401, "Token expired")),
        (Conflict("User already exists"), (400, "User already exists")),
        (NotFound("User not found"), (404, "User not found")),
        (NotFound("No OTP requested", status_code=400), (400, "No OTP requested")),
    ],
)
def test_error_response(exc, expected):
    assert error_response(exc) == expected


@pytest.mark.parametrize("exc", [DeliveryError("smtp down"), InternalError("db exploded")])
def test_server_errors_hide_details(exc):
    assert error_response(exc) == (500, "Internal server error")


def test_token_errors_share_kind():
    assert ExpiredToken.kind == TokenMismatch.kind == ErrorKind.UNAUTHORIZED
    assert issubclass(ExpiredToken, InvalidToken)
