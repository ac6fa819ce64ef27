"""Admin-only endpoints: track upload."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from musicbox.api.deps import get_counters, require_admin
from musicbox.core.config import Settings, get_settings
from musicbox.core.database import get_db
from musicbox.schemas.auth import Identity
from musicbox.schemas.track import UploadResponse
from musicbox.services.counters import EventCounters
from musicbox.services.ingestion import ingest_upload

router = APIRouter()


@router.post("/upload", response_model=UploadResponse)
async def upload_track(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    counters: Annotated[EventCounters, Depends(get_counters)],
    admin: Annotated[Identity, Depends(require_admin)],
) -> UploadResponse:
    """
    Upload a track as multipart/form-data.

    - **title**, **artist**: required text fields
    - **music**: required file part with an audio/* content type
    - **cover**: optional file part with an image/* content type
    - **duration**: optional length in seconds

    Each file may be at most MAX_UPLOAD_BYTES (100 MiB by default). The body is
    read only after the admin check passes, and file parts are streamed to disk.
    """
    track = await ingest_upload(
        db,
        admin,
        content_type=request.headers.get("content-type"),
        content_length=request.headers.get("content-length"),
        body=request.stream(),
        settings=settings,
    )
    counters.increment("uploads")
    return UploadResponse(track_id=track.id)
