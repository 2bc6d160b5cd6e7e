"""Pending email verification model."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from authgate.database import Base
from authgate.models.mixins import TimestampMixin


class PendingVerification(Base, TimestampMixin):
    """In-progress verification handshake for one email address.

    ``code`` is set while a code has been issued and not yet verified, and is
    cleared once verification succeeds. ``token`` is always the latest token
    handed out for this email.
    """

    __tablename__ = "email_verification"

    email: Mapped[str] = mapped_column(String(255), primary_key=True)
    code: Mapped[int | None] = mapped_column(Integer, nullable=True)
    token: Mapped[str] = mapped_column(Text, nullable=False)

    @property
    def is_verified(self) -> bool:
        """True once the code has been consumed by a successful verification."""
        return self.code is None

    def __repr__(self) -> str:
        return f"<PendingVerification(email={self.email}, verified={self.is_verified})>"
