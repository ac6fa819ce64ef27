"""Catalog listing."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from musicbox.api.deps import get_current_user
from musicbox.core.config import Settings, get_settings
from musicbox.core.database import get_db
from musicbox.schemas.auth import Identity
from musicbox.schemas.track import TrackItem, TracksResponse
from musicbox.services.catalog import list_tracks

router = APIRouter()


@router.get("", response_model=TracksResponse)
def get_tracks(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    _user: Annotated[Identity, Depends(get_current_user)],
) -> TracksResponse:
    """All tracks, newest first, with the deployment's environment and release labels."""
    tracks = list_tracks(db)
    return TracksResponse(
        tracks=[TrackItem.model_validate(track) for track in tracks],
        env=settings.APP_ENV,
        release=settings.RELEASE,
    )
