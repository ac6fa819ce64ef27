"""Resolve track ids to media files on disk."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from musicbox.core.errors import NotFound
from musicbox.services.catalog import get_track

if TYPE_CHECKING:
    from musicbox.core.config import Settings

logger = logging.getLogger(__name__)

AUDIO_MEDIA_TYPE = "audio/mpeg"
COVER_MEDIA_TYPE = "image/jpeg"
CACHE_CONTROL = "public, max-age=86400"


def _existing_file(directory: Path, filename: str) -> Path | None:
    # Stored names are generated, but never follow one outside its directory.
    path = directory / filename
    if path.resolve().parent != directory.resolve():
        return None
    return path if path.is_file() else None


def resolve_audio_path(db: Session, track_id: str, settings: "Settings") -> Path:
    """
    Path of a track's audio file.

    Raises NotFound("Track not found") whether the row or the file is missing;
    the two cases are only told apart in the server log.
    """
    track = get_track(db, track_id)
    if track is None:
        raise NotFound("Track not found")
    path = _existing_file(settings.music_dir, track.audio_filename)
    if path is None:
        logger.warning(
            "Audio file missing on disk for track id=%s filename=%s",
            track_id,
            track.audio_filename,
        )
        raise NotFound("Track not found")
    return path


def resolve_cover_path(db: Session, track_id: str, settings: "Settings") -> Path:
    """Path of a track's cover image. Raises NotFound("Cover not found")."""
    track = get_track(db, track_id)
    if track is None or not track.cover_filename:
        raise NotFound("Cover not found")
    path = _existing_file(settings.covers_dir, track.cover_filename)
    if path is None:
        logger.warning(
            "Cover file missing on disk for track id=%s filename=%s",
            track_id,
            track.cover_filename,
        )
        raise NotFound("Cover not found")
    return path
