"""Persistence for users and pending email verifications."""

import logging
from typing import Any

from sqlalchemy import delete, func, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authgate.errors import Conflict
from authgate.models.email_verification import PendingVerification
from authgate.models.user import User

logger = logging.getLogger(__name__)

MUTABLE_USER_FIELDS = ("first_name", "last_name", "phone", "dob", "address")

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def find_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def find_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by primary key."""
    return db.get(User, user_id)


def insert_user(db: Session, **fields: Any) -> User:
    """Insert a new user row, raising Conflict if the email is taken."""
    user = User(**fields)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("User already exists") from e
    db.refresh(user)
    return user


def update_user(db: Session, user: User, **fields: Any) -> User:
    """Overwrite the mutable profile fields of ``user``.

    Keys outside MUTABLE_USER_FIELDS (email, password_hash, id, ...) are ignored.
    """
    for name in MUTABLE_USER_FIELDS:
        if name in fields:
            setattr(user, name, fields[name])
    db.commit()
    db.refresh(user)
    return user


def upsert_pending_verification(db: Session, email: str, code: int, token: str) -> None:
    """Insert or overwrite the pending verification for ``email`` in one statement."""
    # Settings only accept postgresql and sqlite URLs
    insert = _INSERT_BY_DIALECT[db.get_bind().dialect.name]

    stmt = insert(PendingVerification).values(email=email, code=code, token=token)
    stmt = stmt.on_conflict_do_update(
        index_elements=[PendingVerification.email],
        set_={
            "code": stmt.excluded.code,
            "token": stmt.excluded.token,
            "created_at": func.now(),
            "updated_at": func.now(),
        },
    )
    db.execute(stmt)
    db.commit()


def find_pending_verification(db: Session, email: str) -> PendingVerification | None:
    """Get the pending verification row for ``email``."""
    return db.get(PendingVerification, email, populate_existing=True)


def update_pending_verification(
    db: Session, email: str, token: str, code: int | None = None
) -> None:
    """Replace the token and code of an existing pending verification."""
    db.execute(
        update(PendingVerification)
        .where(PendingVerification.email == email)
        .values(token=token, code=code, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    db.commit()


def delete_pending_verification(db: Session, email: str) -> None:
    """Remove the pending verification for ``email`` if present."""
    db.execute(
        delete(PendingVerification)
        .where(PendingVerification.email == email)
        .execution_options(synchronize_session=False)
    )
    db.commit()
