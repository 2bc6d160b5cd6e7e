"""SQLAlchemy models."""

from authgate.models.email_verification import PendingVerification
from authgate.models.user import User

__all__ = [
    "User",
    "PendingVerification",
]
