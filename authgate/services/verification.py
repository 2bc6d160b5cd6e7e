"""Email ownership handshake: request code, verify code, register."""

import logging
import secrets
from typing import Any

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from authgate.errors import (
    Conflict,
    ExpiredToken,
    InvalidCode,
    InvalidInput,
    InvalidToken,
    NotFound,
    TokenMismatch,
)
from authgate.models.user import User
from authgate.services import store
from authgate.services.auth import get_password_hash
from authgate.services.mailer import EmailSender
from authgate.services.tokens import (
    create_access_token,
    create_pending_token,
    create_verified_token,
    verify_token,
)

logger = logging.getLogger(__name__)

CODE_MIN = 100000
CODE_MAX = 999999

VERIFICATION_SUBJECT = "Your Verification Code"


def generate_code() -> int:
    """Uniformly random six digit code."""
    return CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1)


def parse_code(value: Any) -> int:
    """Parse an OTP supplied as an int or a numeric string.

    Leading zeros are tolerated; anything non-numeric is rejected.
    """
    if isinstance(value, bool):
        raise InvalidInput("Code must be numeric")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    raise InvalidInput("Code must be numeric")


class VerificationService:
    """Drives the per-email verification state machine.

    A pending row moves from "code issued" (code set, pending token stored) to
    "verified" (code cleared, verified token stored) and is deleted once the
    account is registered.
    """

    def __init__(self, db: Session, sender: EmailSender) -> None:
        self.db = db
        self.sender = sender

    async def request_code(self, email: str) -> str:
        """Issue a new code for ``email`` and return the pending token.

        Any previous code and token for the email are superseded. The row is
        kept even when delivery fails; a retry overwrites it.
        """
        if not email:
            raise InvalidInput("Email is required")

        code = generate_code()
        token = create_pending_token(email)
        await run_in_threadpool(store.upsert_pending_verification, self.db, email, code, token)
        logger.info(f"Verification code issued for {email}")

        await self.sender.send(email, VERIFICATION_SUBJECT, f"Your OTP is {code}")
        return token

    def verify_code(self, email: str, code: Any, token: str) -> str:
        """Check the code and token for ``email`` and return the verified token."""
        submitted = parse_code(code)

        pending = store.find_pending_verification(self.db, email)
        if pending is None:
            raise NotFound("No OTP requested", status_code=400)
        if pending.token != token:
            raise TokenMismatch()
        if pending.code is None or pending.code != submitted:
            raise InvalidCode()

        verified_token = create_verified_token(email)
        store.update_pending_verification(self.db, email, verified_token, code=None)
        logger.info(f"Email verified for {email}")
        return verified_token

    def register(self, token: str, password: str, **profile: Any) -> tuple[User, str]:
        """Create the account for a verified email and return it with a session token."""
        email = profile["email"]

        pending = store.find_pending_verification(self.db, email)
        if pending is None:
            raise NotFound("Email verification required", status_code=400)
        # A stored pending token means the code was never verified.
        if not pending.token or pending.token != token or not pending.is_verified:
            raise InvalidToken()
        try:
            verify_token(pending.token)
        except ExpiredToken:
            logger.info(f"Verified token expired for {email}")
            raise

        if store.find_user_by_email(self.db, email) is not None:
            raise Conflict("User already exists")

        user = store.insert_user(
            self.db,
            password_hash=get_password_hash(password),
            **profile,
        )
        store.delete_pending_verification(self.db, email)
        logger.info(f"Registered user {user.id}")
        return user, create_access_token(user.id, user.email)
