"""Revoked token model."""

from sqlalchemy import Column, DateTime, Integer, String, func

from src.database import Base


class RevokedToken(Base):
    """A bearer token that was logged out or superseded by a refresh.

    ``expires_at`` is the end of the token's refresh window; after it the
    token is rejected on its own and the row can be purged.
    """

    __tablename__ = "revoked_tokens"

    id = Column(Integer, primary_key=True, index=True)
    jti = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
