"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import ValidationError

from musicbox.schemas.auth import Identity

if TYPE_CHECKING:
    from musicbox.core.config import Settings

# Max lengths for username and password validation. No minimum beyond non-empty.
USERNAME_MAX_LEN = 255
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: int,
    username: str,
    is_admin: bool,
    settings: "Settings",
    issued_at: datetime | None = None,
) -> str:
    """
    Create a signed identity assertion for a user.

    Claims: sub (user id as string), id, username, is_admin, iat, exp.
    The id/username/is_admin claims keep tokens readable by existing clients.
    """
    now = issued_at or datetime.now(UTC)
    expire = now + timedelta(hours=settings.JWT_EXPIRE_HOURS)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "id": user_id,
        "username": username,
        "is_admin": bool(is_admin),
        "iat": now,
        "exp": expire,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: "Settings") -> dict[str, Any]:
    """
    Decode and validate JWT; return the raw payload.
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "iat"]},
    )


def verify_access_token(token: str | None, settings: "Settings") -> Identity | None:
    """
    Verify a token and return its claims, or None.

    Fails closed: a missing token, bad signature, expiry, or any malformed claim
    yields None, never a partially trusted identity.
    """
    if not token:
        return None
    try:
        payload = decode_access_token(token, settings)
    except jwt.PyJWTError:
        return None
    try:
        identity = Identity.model_validate(payload)
    except ValidationError:
        return None
    if payload.get("sub") is not None and payload["sub"] != str(identity.id):
        return None
    return identity
