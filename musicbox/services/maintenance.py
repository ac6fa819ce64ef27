"""Media maintenance: delete files in the media directories that no track references."""

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from musicbox.models import Track

if TYPE_CHECKING:
    from musicbox.core.config import Settings

logger = logging.getLogger(__name__)

# Files younger than this may belong to an upload still in progress.
DEFAULT_MIN_AGE_SECONDS = 3600


def _orphans(directory: Path, referenced: set[str], cutoff: float) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file()
        and path.name not in referenced
        and path.stat().st_mtime < cutoff
    )


def find_orphaned_files(
    session: Session,
    settings: "Settings",
    min_age_seconds: int = DEFAULT_MIN_AGE_SECONDS,
) -> list[Path]:
    """Files under the music and covers directories not named by any track row."""
    cutoff = time.time() - min_age_seconds
    rows = session.query(Track.audio_filename, Track.cover_filename).all()
    audio_names = {audio for audio, _ in rows if audio}
    cover_names = {cover for _, cover in rows if cover}
    return _orphans(settings.music_dir, audio_names, cutoff) + _orphans(
        settings.covers_dir, cover_names, cutoff
    )


def prune_orphaned_files(
    session: Session,
    settings: "Settings",
    dry_run: bool = False,
    min_age_seconds: int = DEFAULT_MIN_AGE_SECONDS,
) -> int:
    """
    Delete orphaned media files (left behind by crashes mid-upload or by
    tracks removed out of band).

    Returns the number of files removed, or that would be removed when
    dry_run is set. Idempotent: safe to run repeatedly.
    """
    orphans = find_orphaned_files(session, settings, min_age_seconds)
    if dry_run:
        for path in orphans:
            logger.info("Orphaned media file (dry run): %s", path)
        return len(orphans)

    removed = 0
    for path in orphans:
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        removed += 1
    if removed:
        logger.info("Maintenance run: orphaned_files_removed=%s", removed)
    return removed
