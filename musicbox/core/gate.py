"""Access gate: static table of protected path prefixes plus the auth checks applied to them."""

from typing import TYPE_CHECKING

from musicbox.core.errors import Forbidden, Unauthenticated
from musicbox.core.security import verify_access_token
from musicbox.schemas.auth import Identity

if TYPE_CHECKING:
    from musicbox.core.config import Settings

# Requests whose path starts with one of these need a valid bearer token.
# Everything else (auth endpoints, health, metrics, landing page) is open.
PROTECTED_PREFIXES = (
    "/api/tracks",
    "/api/event",
    "/api/stream/",
    "/api/cover/",
    "/api/admin/",
)

BEARER_PREFIX = "Bearer "


def is_protected(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in PROTECTED_PREFIXES)


def bearer_token(authorization: str | None) -> str | None:
    """Token from an 'Authorization: Bearer <token>' header value, else None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def authenticate(authorization: str | None, settings: "Settings") -> Identity:
    """Verify the bearer token in an Authorization header value. Raises Unauthenticated."""
    token = bearer_token(authorization)
    if token is None:
        raise Unauthenticated("Authentication required")
    identity = verify_access_token(token, settings)
    if identity is None:
        raise Unauthenticated("Invalid token")
    return identity


def authorize_admin(identity: Identity) -> Identity:
    """Return identity unchanged if it carries the admin flag; raise Forbidden otherwise."""
    if not identity.is_admin:
        raise Forbidden("Admin access required")
    return identity
