"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.api.dependencies import AuthContext, get_auth_context, get_refresh_context
from src.config import get_settings
from src.database import get_db
from src.exceptions import AuthenticationError, ValidationFailedError
from src.models.user import User
from src.schemas.auth import (
    MessageResponse,
    RegisterResponse,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    refresh_access_token,
    revoke_token,
    token_expires_in,
)
from src.services.validation import Constraint, Violation, validate_registration

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _token_response(token: str, user: User) -> TokenResponse:
    return TokenResponse(
        access_token=token,
        user=UserResponse.model_validate(user),
        expires_in=token_expires_in(),
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    violations = validate_registration(
        db, user_data.model_dump(), min_length=settings.password_min_length
    )
    if violations:
        raise ValidationFailedError(violations)

    try:
        user = create_user(db, user_data.name, user_data.email, user_data.password)
    except IntegrityError:
        # Another request registered the same email after validation ran
        db.rollback()
        raise ValidationFailedError(
            [Violation("email", Constraint.UNIQUE, "The email has already been taken.")]
        ) from None

    logger.info(f"Registered user {user.id}")

    return RegisterResponse(result=UserResponse.model_validate(user))


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = None
    if isinstance(credentials.email, str) and isinstance(credentials.password, str):
        user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        logger.info(f"Failed login for {credentials.email!r}")
        raise AuthenticationError("Unauthorized / Wrong credentials")

    return _token_response(create_access_token(user), user)


@router.get("/me", response_model=UserResponse)
async def get_me(
    context: Annotated[AuthContext, Depends(get_auth_context)],
):
    """Get current user information."""
    return context.user


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    context: Annotated[AuthContext, Depends(get_refresh_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Exchange the current token for a new one. The old token stops working."""
    token = refresh_access_token(db, context.claims, context.user)
    if token is None:
        raise AuthenticationError()

    logger.info(f"Refreshed token for user {context.user.id}")

    return _token_response(token, context.user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    context: Annotated[AuthContext, Depends(get_auth_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Logout by revoking the current token."""
    if not revoke_token(db, context.claims):
        raise AuthenticationError()

    logger.info(f"Logged out user {context.user.id}")

    return MessageResponse(message="Successfully logged out")
