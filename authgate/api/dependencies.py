"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from authgate.database import get_db
from authgate.errors import Unauthorized
from authgate.services.mailer import EmailSender, get_email_sender
from authgate.services.tokens import decode_access_token
from authgate.services.verification import VerificationService

security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> int:
    """Get the authenticated user id from the session token.

    Missing, malformed, expired and non-session tokens are all rejected the same way.
    """
    if credentials is None:
        raise Unauthorized()

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise Unauthorized()

    user_id = payload.get("userId")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise Unauthorized()

    return user_id


def get_verification_service(
    db: Annotated[Session, Depends(get_db)],
    sender: Annotated[EmailSender, Depends(get_email_sender)],
) -> VerificationService:
    """Get verification service with dependencies."""
    return VerificationService(db, sender)
