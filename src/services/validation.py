"""Field validation for auth requests.

Each field maps to an ordered tuple of ``Constraint`` members. Checking a
payload returns every ``Violation`` found instead of stopping at the first
one, so clients can show all problems together.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session

from src.services.auth import get_user_by_email


class Constraint(str, Enum):
    """Constraints that can be applied to a request field."""

    REQUIRED = "required"
    STRING = "string"
    EMAIL = "email"
    UNIQUE = "unique"
    CONFIRMED = "confirmed"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    NO_NULL_BYTES = "no_null_bytes"
    # Reported from request parsing rather than checked by check_fields
    FORMAT = "format"


@dataclass(frozen=True)
class Violation:
    """A single failed constraint on a single field."""

    field: str
    constraint: Constraint
    message: str


MAX_LENGTHS: dict[str, int] = {
    "name": 255,
    "email": 255,
    "password": 128,
}

REGISTRATION_RULES: dict[str, tuple[Constraint, ...]] = {
    "name": (
        Constraint.REQUIRED,
        Constraint.STRING,
        Constraint.MAX_LENGTH,
        Constraint.NO_NULL_BYTES,
    ),
    "email": (
        Constraint.REQUIRED,
        Constraint.STRING,
        Constraint.MAX_LENGTH,
        Constraint.EMAIL,
        Constraint.UNIQUE,
    ),
    "password": (
        Constraint.REQUIRED,
        Constraint.STRING,
        Constraint.NO_NULL_BYTES,
        Constraint.CONFIRMED,
        Constraint.MIN_LENGTH,
        Constraint.MAX_LENGTH,
    ),
}


def _label(field: str) -> str:
    return field.replace("_", " ")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def _check(
    field: str,
    constraint: Constraint,
    value: Any,
    data: Mapping[str, Any],
    db: Session | None,
    min_length: int,
) -> str | None:
    """Return a message if ``value`` fails ``constraint``, otherwise None."""
    label = _label(field)

    if constraint is Constraint.REQUIRED:
        if _is_blank(value):
            return f"The {label} field is required."
    elif constraint is Constraint.STRING:
        if not isinstance(value, str):
            return f"The {label} must be a string."
    elif constraint is Constraint.EMAIL:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return f"The {label} must be a valid email address."
    elif constraint is Constraint.UNIQUE:
        if db is None:
            raise ValueError(f"Checking uniqueness of '{field}' requires a database session")
        if get_user_by_email(db, value) is not None:
            return f"The {label} has already been taken."
    elif constraint is Constraint.CONFIRMED:
        if value != data.get(f"{field}_confirmation"):
            return f"The {label} confirmation does not match."
    elif constraint is Constraint.MIN_LENGTH:
        if len(value) < min_length:
            return f"The {label} must be at least {min_length} characters."
    elif constraint is Constraint.MAX_LENGTH:
        max_length = MAX_LENGTHS[field]
        if len(value) > max_length:
            return f"The {label} may not be greater than {max_length} characters."
    elif constraint is Constraint.NO_NULL_BYTES:
        if "\x00" in value:
            return f"The {label} must not contain null bytes."

    return None


def check_fields(
    data: Mapping[str, Any],
    rules: Mapping[str, tuple[Constraint, ...]],
    *,
    db: Session | None = None,
    min_length: int = 6,
) -> list[Violation]:
    """Check ``data`` against ``rules`` and return all violations.

    Constraints for a field run in order. A failing REQUIRED or STRING
    constraint stops the remaining checks for that field, since they all
    assume a non-empty string.
    """
    violations: list[Violation] = []

    for field, constraints in rules.items():
        value = data.get(field)
        for constraint in constraints:
            message = _check(field, constraint, value, data, db, min_length)
            if message is None:
                continue
            violations.append(Violation(field=field, constraint=constraint, message=message))
            if constraint in (Constraint.REQUIRED, Constraint.STRING):
                break

    return violations


def validate_registration(
    db: Session, data: Mapping[str, Any], min_length: int = 6
) -> list[Violation]:
    """Validate a registration payload."""
    return check_fields(data, REGISTRATION_RULES, db=db, min_length=min_length)
