"""Credential store operations: registration, login, lookup."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from musicbox.core.errors import Conflict, StoreError, Unauthenticated, ValidationError
from musicbox.core.security import (
    PASSWORD_MAX_LEN,
    USERNAME_MAX_LEN,
    hash_password,
    verify_password,
)
from musicbox.models import User

if TYPE_CHECKING:
    from musicbox.core.config import Settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def register_user(
    db: Session,
    username: str | None,
    password: str | None,
    settings: "Settings",
) -> User:
    """Create a non-admin account. Raises ValidationError or Conflict."""
    if not username or not password:
        raise ValidationError("Username and password required")
    if len(username) > USERNAME_MAX_LEN:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LEN} characters")
    if len(password) > PASSWORD_MAX_LEN:
        raise ValidationError(f"Password must be at most {PASSWORD_MAX_LEN} characters")

    existing = db.query(User).filter(User.username == username).first()
    if existing is not None:
        raise Conflict("Username already exists")

    user = User(
        username=username,
        password_hash=hash_password(password, settings.BCRYPT_ROUNDS),
        is_admin=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same name.
        db.rollback()
        raise Conflict("Username already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Registration failed for username=%s", username)
        raise StoreError("Database error") from e
    db.refresh(user)
    logger.info("Registered user id=%s username=%s", user.id, user.username)
    return user


def authenticate_user(db: Session, username: str | None, password: str | None) -> User:
    """Return the user for valid credentials; raise Unauthenticated otherwise."""
    if not username or not password:
        raise Unauthenticated(INVALID_CREDENTIALS)
    try:
        user = db.query(User).filter(User.username == username).first()
    except SQLAlchemyError as e:
        logger.exception("User lookup failed during login")
        raise Unauthenticated(INVALID_CREDENTIALS) from e
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for username=%s", username)
        raise Unauthenticated(INVALID_CREDENTIALS)
    return user


def get_user(db: Session, user_id: int) -> User | None:
    """User by id, or None. Raises StoreError on database failure."""
    try:
        return db.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as e:
        logger.exception("User lookup failed for id=%s", user_id)
        raise StoreError("Database error") from e
