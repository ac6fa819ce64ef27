"""Catalog store operations: list, fetch and insert track rows."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from musicbox.core.errors import StoreError
from musicbox.models import Track

logger = logging.getLogger(__name__)


def list_tracks(db: Session) -> list[Track]:
    """All tracks, newest first. Raises StoreError on database failure."""
    try:
        return db.query(Track).order_by(Track.created_at.desc()).all()
    except SQLAlchemyError as e:
        logger.exception("Listing tracks failed")
        raise StoreError("Database error") from e


def get_track(db: Session, track_id: str) -> Track | None:
    """Track by id, or None. A database failure is logged and treated as absent."""
    try:
        return db.query(Track).filter(Track.id == track_id).first()
    except SQLAlchemyError:
        logger.exception("Track lookup failed for id=%s", track_id)
        return None


def add_track(
    db: Session,
    *,
    track_id: str,
    title: str,
    artist: str,
    audio_filename: str,
    cover_filename: str | None,
    duration_seconds: int,
    uploaded_by: int,
) -> Track:
    """Insert and commit a track row. Raises StoreError (after rollback) on failure."""
    track = Track(
        id=track_id,
        title=title,
        artist=artist,
        audio_filename=audio_filename,
        cover_filename=cover_filename,
        duration_seconds=duration_seconds,
        uploaded_by=uploaded_by,
    )
    db.add(track)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Inserting track id=%s failed", track_id)
        raise StoreError("Database error") from e
    db.refresh(track)
    return track
