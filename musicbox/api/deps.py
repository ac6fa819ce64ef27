"""FastAPI dependencies: caller identity (set by the access gate), shared app state, JSON bodies."""

import json
from typing import Annotated, Any

from fastapi import Depends, Request

from musicbox.core.errors import Unauthenticated
from musicbox.core.gate import authorize_admin
from musicbox.schemas.auth import Identity
from musicbox.services.counters import EventCounters


def get_current_user(request: Request) -> Identity:
    """Identity verified by the access-gate middleware. Raises 401 if the gate did not run."""
    identity = getattr(request.state, "user", None)
    if identity is None:
        raise Unauthenticated("Authentication required")
    return identity


def require_admin(
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> Identity:
    """Dependency: require an authenticated caller with the admin flag. Raises 403 otherwise."""
    return authorize_admin(current_user)


def get_counters(request: Request) -> EventCounters:
    return request.app.state.counters


async def get_json_object(request: Request) -> dict[str, Any]:
    """
    Request body as a JSON object.

    A missing, unparseable or non-object body reads as {}, so the route answers
    with its own error instead of a request-validation 400.
    """
    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}
