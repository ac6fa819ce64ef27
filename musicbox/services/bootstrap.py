"""Startup tasks: storage directories, schema, and the bootstrap admin account."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from musicbox.core.security import hash_password
from musicbox.models import Base, User

if TYPE_CHECKING:
    from musicbox.core.config import Settings

logger = logging.getLogger(__name__)


def ensure_directories(settings: "Settings") -> None:
    """Create the data, music and covers directories. OSError propagates and aborts startup."""
    for directory in (settings.DATA_DIR, settings.UPLOADS_DIR, settings.music_dir, settings.covers_dir):
        directory.mkdir(parents=True, exist_ok=True)


def ensure_schema(engine: Engine) -> None:
    """Create missing tables. Alembic migrations describe the same schema for managed deployments."""
    Base.metadata.create_all(bind=engine)


def ensure_admin(db: Session, settings: "Settings") -> bool:
    """
    Create the configured admin account unless a user with that name exists.

    An existing account is left untouched (its password and admin flag are not reset).
    Returns True if an account was created.
    """
    existing = db.query(User).filter(User.username == settings.ADMIN_USERNAME).first()
    if existing is not None:
        return False
    admin = User(
        username=settings.ADMIN_USERNAME,
        password_hash=hash_password(
            settings.ADMIN_PASSWORD.get_secret_value(), settings.BCRYPT_ROUNDS
        ),
        is_admin=True,
    )
    db.add(admin)
    db.commit()
    logger.info("Created bootstrap admin user '%s'", settings.ADMIN_USERNAME)
    return True
