"""Authentication schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request body accepting camelCase keys (snake_case also allowed)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SendCodeRequest(CamelModel):
    """Request a verification code for an email."""

    email: str = Field(..., min_length=1, max_length=255)


class VerifyEmailRequest(CamelModel):
    """Submit the emailed code together with the pending token."""

    email: str = Field(..., min_length=1, max_length=255)
    code: int | str
    token: str = Field(..., min_length=1)


class ProfileFields(CamelModel):
    """Mutable profile fields."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=32)
    dob: date
    address: str = Field(..., min_length=1)


class UserRegister(ProfileFields):
    """User registration request, bound to a verified-email token."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
    token: str = Field(..., min_length=1)


class UserLogin(CamelModel):
    """User login request."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class AccountUpdate(ProfileFields):
    """Profile update request. Email and password keys are ignored."""


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    dob: date
    address: str
    created_at: datetime | None = None


class TokenResponse(BaseModel):
    """Message plus a token for the next step."""

    message: str
    token: str


class RegisterResponse(BaseModel):
    """Registration result with the new account and a session token."""

    message: str
    user: UserResponse
    token: str


class AccountResponse(BaseModel):
    user: UserResponse


class AccountUpdateResponse(BaseModel):
    message: str
    user: UserResponse
