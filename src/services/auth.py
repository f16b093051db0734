"""Authentication service for JWT and password handling."""

import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordValueError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.revoked_token import RevokedToken
from src.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REQUIRED_CLAIMS = ("sub", "jti", "iat", "exp")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def token_expires_in() -> int:
    """Lifetime of a freshly issued access token, in seconds."""
    return settings.jwt_ttl_minutes * 60


def create_access_token(user: User) -> str:
    """Create a JWT access token for ``user``.

    Every token gets a random ``jti`` so it can be revoked on its own.
    """
    issued_at = datetime.now(UTC)
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_ttl_minutes),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _refresh_deadline(claims: dict[str, Any]) -> datetime:
    """Last moment at which the token described by ``claims`` can be refreshed."""
    issued_at = datetime.fromtimestamp(int(claims["iat"]), tz=UTC)
    return issued_at + timedelta(minutes=settings.jwt_refresh_ttl_minutes)


def decode_access_token(token: str, *, allow_expired: bool = False) -> dict[str, Any] | None:
    """Decode and validate a JWT token.

    With ``allow_expired`` an expired token is still accepted as long as it
    is inside its refresh window. Returns None for anything invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": not allow_expired},
        )
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        return None

    if any(payload.get(claim) is None for claim in REQUIRED_CLAIMS):
        logger.debug("Rejected token: missing required claims")
        return None

    try:
        deadline = _refresh_deadline(payload)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Rejected token: malformed iat claim")
        return None

    if allow_expired and datetime.now(UTC) >= deadline:
        logger.debug(f"Rejected token {payload['jti']}: refresh window closed")
        return None

    return payload


def is_token_revoked(db: Session, jti: str) -> bool:
    """Check whether the token with ``jti`` has been revoked."""
    return db.query(RevokedToken.id).filter(RevokedToken.jti == jti).first() is not None


def revoke_token(db: Session, claims: dict[str, Any]) -> bool:
    """Revoke the token described by ``claims``.

    Returns False if the token was already revoked, including by a
    concurrent request that committed first.
    """
    jti = claims["jti"]
    if is_token_revoked(db, jti):
        return False

    db.add(RevokedToken(jti=jti, expires_at=_refresh_deadline(claims)))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Token {jti} was revoked concurrently")
        return False
    return True


def refresh_access_token(db: Session, claims: dict[str, Any], user: User) -> str | None:
    """Exchange the token described by ``claims`` for a new one.

    The old token is revoked, so each token can be refreshed only once.
    Returns None if the old token had already been revoked.
    """
    if not revoke_token(db, claims):
        return None
    return create_access_token(user)


def purge_expired_revocations(db: Session) -> int:
    """Delete revocation records whose tokens can no longer be used anyway."""
    deleted = (
        db.query(RevokedToken)
        .filter(RevokedToken.expires_at < datetime.now(UTC))
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted:
        logger.info(f"Purged {deleted} expired token revocations")
    return deleted


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    try:
        if not verify_password(password, user.password_hash):
            return None
    except PasswordValueError:
        # bcrypt rejects some inputs outright, e.g. NUL bytes
        return None
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email, ignoring case."""
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by primary key."""
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, name: str, email: str, password: str) -> User:
    """Create a new user."""
    hashed_password = get_password_hash(password)
    user = User(name=name.strip(), email=email.strip(), password_hash=hashed_password)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
