"""Authentication service for password handling and account operations."""

import logging

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from authgate.errors import InvalidCredentials, NotFound
from authgate.models.user import User
from authgate.services import store
from authgate.services.tokens import create_access_token

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Checked against when the email is unknown so both login failures cost one bcrypt verify
_DUMMY_HASH = pwd_context.hash("authgate-dummy-password")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = store.find_user_by_email(db, email)
    if not user:
        verify_password(password, _DUMMY_HASH)
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def login(db: Session, email: str, password: str) -> str:
    """Check credentials and return a session token.

    Unknown email and wrong password raise the same error.
    """
    user = authenticate_user(db, email, password)
    if user is None:
        raise InvalidCredentials()
    logger.info(f"User {user.id} logged in")
    return create_access_token(user.id, user.email)


def get_account(db: Session, user_id: int) -> User:
    """Load the account for an authenticated user id."""
    user = store.find_user_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def update_account(db: Session, user_id: int, **fields) -> User:
    """Overwrite the mutable profile fields of an account."""
    user = get_account(db, user_id)
    return store.update_user(db, user, **fields)
