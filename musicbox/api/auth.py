"""Login, registration and token verification. All open; no bearer token required."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from musicbox.api.deps import get_json_object
from musicbox.core.config import Settings, get_settings
from musicbox.core.database import get_db
from musicbox.core.errors import Unauthenticated
from musicbox.core.gate import bearer_token
from musicbox.core.security import create_access_token, verify_access_token
from musicbox.schemas.auth import (
    Credentials,
    LoginResponse,
    RegisterResponse,
    UserOut,
    VerifyResponse,
)
from musicbox.services.accounts import authenticate_user, get_user, register_user

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    payload: Annotated[dict[str, Any], Depends(get_json_object)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a bearer token valid for 24 hours.
    Include the token in the Authorization header as: Bearer <token>
    """
    body = Credentials.from_payload(payload)
    user = authenticate_user(db, body.username, body.password)
    token = create_access_token(
        user_id=user.id,
        username=user.username,
        is_admin=user.is_admin,
        settings=settings,
    )
    return LoginResponse(token=token, user=UserOut.model_validate(user))


@router.post("/register", response_model=RegisterResponse)
def register(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    payload: Annotated[dict[str, Any], Depends(get_json_object)],
) -> RegisterResponse:
    """Create a regular (non-admin) account. The caller must log in afterwards."""
    body = Credentials.from_payload(payload)
    register_user(db, body.username, body.password, settings)
    return RegisterResponse(success=True)


@router.get("/verify", response_model=VerifyResponse)
def verify(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    authorization: Annotated[str | None, Header()] = None,
) -> VerifyResponse:
    """Return the account behind a bearer token, re-read from the credential store."""
    identity = verify_access_token(bearer_token(authorization), settings)
    if identity is None:
        raise Unauthenticated("Invalid token")
    user = get_user(db, identity.id)
    if user is None:
        raise Unauthenticated("User not found")
    return VerifyResponse(user=UserOut.model_validate(user))
