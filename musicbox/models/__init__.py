"""SQLAlchemy ORM models."""

from musicbox.models.base import Base
from musicbox.models.track import Track
from musicbox.models.user import User

__all__ = ["Base", "Track", "User"]
