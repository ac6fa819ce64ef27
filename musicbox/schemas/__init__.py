"""Pydantic request/response schemas."""

from musicbox.schemas.auth import (
    Credentials,
    Identity,
    LoginResponse,
    RegisterResponse,
    UserOut,
    VerifyResponse,
)
from musicbox.schemas.event import EventRequest, EventResponse
from musicbox.schemas.track import TrackItem, TracksResponse, UploadResponse

__all__ = [
    "Credentials",
    "EventRequest",
    "EventResponse",
    "Identity",
    "LoginResponse",
    "RegisterResponse",
    "TrackItem",
    "TracksResponse",
    "UploadResponse",
    "UserOut",
    "VerifyResponse",
]
