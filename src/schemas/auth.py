"""Authentication schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class UserRegister(BaseModel):
    """User registration request.

    Types, lengths, format and confirmation are all checked by
    ``src.services.validation``, which reports every violation at once.
    """

    name: Any = None
    email: Any = None
    password: Any = None
    password_confirmation: Any = None


class UserLogin(BaseModel):
    """User login request.

    Anything other than two strings is treated as wrong credentials.
    """

    email: Any = None
    password: Any = None


class UserResponse(BaseModel):
    """Public user information. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TokenResponse(BaseModel):
    """Bearer token bundle returned by login and refresh."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
    expires_in: int


class RegisterResponse(BaseModel):
    """Successful registration response."""

    status: str = "success"
    message: str = "User successfully registered"
    result: UserResponse


class MessageResponse(BaseModel):
    """Plain status acknowledgment."""

    status: str = "success"
    message: str
