"""SQLAlchemy declarative Base shared by the users and tracks tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
