"""Audio streaming and cover images."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from musicbox.api.deps import get_current_user
from musicbox.core.config import Settings, get_settings
from musicbox.core.database import get_db
from musicbox.schemas.auth import Identity
from musicbox.services.media import (
    AUDIO_MEDIA_TYPE,
    CACHE_CONTROL,
    COVER_MEDIA_TYPE,
    resolve_audio_path,
    resolve_cover_path,
)

router = APIRouter()


@router.get("/stream/{track_id}", response_class=FileResponse)
def stream_track(
    track_id: str,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    _user: Annotated[Identity, Depends(get_current_user)],
) -> FileResponse:
    """
    Stream a track's audio file.

    Always served as audio/mpeg whatever the stored encoding. A plain GET returns
    the whole file; Range requests get 206 partial content.
    """
    path = resolve_audio_path(db, track_id, settings)
    return FileResponse(
        path,
        media_type=AUDIO_MEDIA_TYPE,
        headers={"Cache-Control": CACHE_CONTROL},
    )


@router.get("/cover/{track_id}", response_class=FileResponse)
def get_cover(
    track_id: str,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    _user: Annotated[Identity, Depends(get_current_user)],
) -> FileResponse:
    """Serve a track's cover image as image/jpeg."""
    path = resolve_cover_path(db, track_id, settings)
    return FileResponse(
        path,
        media_type=COVER_MEDIA_TYPE,
        headers={"Cache-Control": CACHE_CONTROL},
    )
