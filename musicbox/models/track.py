"""ORM model for uploaded tracks (catalog store)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from musicbox.models.base import Base


class Track(Base):
    """
    One uploaded audio file plus optional cover. Never mutated after insert.

    audio_filename and cover_filename are the generated names under the music
    and covers directories, never the client-supplied ones.
    """

    __tablename__ = "tracks"

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=False)
    artist = Column(String(255), nullable=False)
    audio_filename = Column("filename", String(255), nullable=False)
    cover_filename = Column(String(255), nullable=True)
    duration_seconds = Column("duration", Integer, nullable=False, default=0)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
