"""Pydantic schemas for API requests and responses."""

from authgate.schemas.auth import (
    AccountResponse,
    AccountUpdate,
    AccountUpdateResponse,
    RegisterResponse,
    SendCodeRequest,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    VerifyEmailRequest,
)

__all__ = [
    "SendCodeRequest",
    "VerifyEmailRequest",
    "UserRegister",
    "UserLogin",
    "AccountUpdate",
    "UserResponse",
    "TokenResponse",
    "RegisterResponse",
    "AccountResponse",
    "AccountUpdateResponse",
]
