"""Schemas for client playback events."""

from typing import Any

from pydantic import BaseModel

from musicbox.schemas.auth import string_field


class EventRequest(BaseModel):
    """Playback event reported by the player; only 'play' and 'skip' are counted."""

    type: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "EventRequest":
        return cls(type=string_field(payload, "type"))


class EventResponse(BaseModel):
    ok: bool = True
