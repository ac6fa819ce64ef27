"""Core app configuration, database, security and error types."""

from musicbox.core.config import get_settings, settings
from musicbox.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
