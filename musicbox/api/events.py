"""Playback events reported by the player."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from musicbox.api.deps import get_counters, get_current_user, get_json_object
from musicbox.schemas.auth import Identity
from musicbox.schemas.event import EventRequest, EventResponse
from musicbox.services.counters import EventCounters

router = APIRouter()

# Event type -> counter it increments; other types are accepted and ignored.
EVENT_COUNTERS = {
    "play": "plays",
    "skip": "skips",
}


@router.post("", response_model=EventResponse)
def post_event(
    counters: Annotated[EventCounters, Depends(get_counters)],
    _user: Annotated[Identity, Depends(get_current_user)],
    payload: Annotated[dict[str, Any], Depends(get_json_object)],
) -> EventResponse:
    """Count a play or skip. Unknown types and unreadable bodies are accepted and ignored."""
    body = EventRequest.from_payload(payload)
    counter = EVENT_COUNTERS.get(body.type) if body.type else None
    if counter is not None:
        counters.increment(counter)
    return EventResponse(ok=True)
