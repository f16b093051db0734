"""FastAPI dependencies for authentication and database."""

from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.exceptions import AuthenticationError
from src.models.user import User
from src.services.auth import decode_access_token, get_user_by_id, is_token_revoked

# Missing credentials are turned into our own 401 below
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller of a request."""

    user: User
    token: str
    claims: dict[str, Any]


def _resolve_context(
    db: Session,
    credentials: HTTPAuthorizationCredentials | None,
    *,
    allow_expired: bool = False,
) -> AuthContext:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    token = credentials.credentials
    payload = decode_access_token(token, allow_expired=allow_expired)
    if payload is None:
        raise AuthenticationError()

    if is_token_revoked(db, payload["jti"]):
        raise AuthenticationError()

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError() from None

    user = get_user_by_id(db, user_id)
    if user is None:
        raise AuthenticationError()

    return AuthContext(user=user, token=token, claims=payload)


def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthContext:
    """Get the caller of the request from an unexpired, unrevoked JWT."""
    return _resolve_context(db, credentials)


def get_refresh_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthContext:
    """Like ``get_auth_context`` but also accepts expired tokens inside the refresh window."""
    return _resolve_context(db, credentials, allow_expired=True)

