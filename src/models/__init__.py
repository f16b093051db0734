"""SQLAlchemy models."""

from src.models.revoked_token import RevokedToken
from src.models.user import User

__all__ = [
    "User",
    "RevokedToken",
]
