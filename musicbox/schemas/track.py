"""Schemas for catalog listings and the upload endpoint."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TrackItem(BaseModel):
    """
    Track as listed to clients.

    Field names follow the JSON the web player already consumes (filename,
    duration); values are read from the ORM attributes via validation aliases.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    artist: str
    filename: str = Field(validation_alias="audio_filename")
    cover_filename: str | None = None
    duration: int = Field(default=0, ge=0, validation_alias="duration_seconds")
    uploaded_by: int | None = None
    created_at: datetime | None = None


class TracksResponse(BaseModel):
    """Response for GET /api/tracks: newest first, with deployment labels."""

    tracks: list[TrackItem]
    env: str
    release: str


class UploadResponse(BaseModel):
    """Response after a track was stored and registered."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    track_id: str = Field(..., serialization_alias="trackId")
