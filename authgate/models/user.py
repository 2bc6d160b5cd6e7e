"""User model."""

from sqlalchemy import Column, Date, Integer, String, Text

from authgate.database import Base
from authgate.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Registered account. Email is immutable once the row exists."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    dob = Column(Date, nullable=False)
    address = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
