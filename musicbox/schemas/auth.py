"""Request/response schemas for auth endpoints and the verified identity."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def string_field(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return value if isinstance(value, str) else None


class Credentials(BaseModel):
    """Username and password for login or registration.

    Both are optional so that missing or non-string fields surface as the
    endpoint's own error (401 on login, 400 on register).
    """

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Credentials":
        """Build from a decoded JSON object; non-string values count as missing."""
        return cls(
            username=string_field(payload, "username"),
            password=string_field(payload, "password"),
        )


class UserOut(BaseModel):
    """Public view of a user (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    is_admin: bool


class LoginResponse(BaseModel):
    """Token returned after successful login, plus the user it identifies."""

    token: str = Field(..., description="Signed bearer token (JWT)")
    user: UserOut


class RegisterResponse(BaseModel):
    success: bool = True


class VerifyResponse(BaseModel):
    user: UserOut


class Identity(BaseModel):
    """Claims of a verified bearer token, trusted as-is for one request."""

    id: int
    username: str
    is_admin: bool
    iat: int = Field(..., description="Issued-at, seconds since epoch")
    exp: int = Field(..., description="Expiry, seconds since epoch")
