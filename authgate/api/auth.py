"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from authgate.api.dependencies import get_current_user_id, get_verification_service
from authgate.database import get_db
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
from authgate.services import auth as auth_service
from authgate.services.verification import VerificationService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/send-code", response_model=TokenResponse)
async def send_code(
    body: SendCodeRequest,
    verification: Annotated[VerificationService, Depends(get_verification_service)],
):
    """Email a one-time code and return the token for the verify step."""
    token = await verification.request_code(body.email)
    return TokenResponse(message="OTP sent", token=token)


@router.post("/verify-email", response_model=TokenResponse)
def verify_email(
    body: VerifyEmailRequest,
    verification: Annotated[VerificationService, Depends(get_verification_service)],
):
    """Confirm the emailed code and return the token for registration."""
    token = verification.verify_code(body.email, body.code, body.token)
    return TokenResponse(message="Email verified", token=token)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: UserRegister,
    verification: Annotated[VerificationService, Depends(get_verification_service)],
):
    """Register a new user for a verified email."""
    profile = body.model_dump(exclude={"token", "password"})
    user, token = verification.register(body.token, body.password, **profile)
    return RegisterResponse(
        message="Registration successful",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    token = auth_service.login(db, credentials.email, credentials.password)
    return TokenResponse(message="Login successful", token=token)


@router.get("/account", response_model=AccountResponse)
def get_account(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get current user profile."""
    user = auth_service.get_account(db, user_id)
    return AccountResponse(user=UserResponse.model_validate(user))


@router.put("/account", response_model=AccountUpdateResponse)
def update_account(
    body: AccountUpdate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update current user profile. Email and password cannot be changed here."""
    user = auth_service.update_account(db, user_id, **body.model_dump())
    return AccountUpdateResponse(
        message="Account updated successfully",
        user=UserResponse.model_validate(user),
    )
