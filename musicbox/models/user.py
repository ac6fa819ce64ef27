"""ORM model for accounts (credential store)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from musicbox.models.base import Base


class User(Base):
    """
    Registered account. Immutable after registration.

    The hash column is named ``password`` so existing music.db files keep working.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column("password", String(255), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
