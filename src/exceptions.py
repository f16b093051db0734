"""Exceptions raised by the auth service.

Exception hierarchy:
    AuthServiceError (base)
    ├── ValidationFailedError   -> 422, field-level messages
    └── AuthenticationError     -> 401, generic message

Anything outside this hierarchy (database down, hasher failure) is not
handled here and surfaces as a generic 500.
"""

from fastapi import status

from src.services.validation import Violation


class AuthServiceError(Exception):
    """Base exception for errors rendered as JSON responses."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {"status": "error", "message": self.message}


class ValidationFailedError(AuthServiceError):
    """Raised when request fields violate one or more constraints."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, violations: list[Violation], message: str = "The given data was invalid."):
        self.violations = violations
        super().__init__(message)

    @property
    def errors(self) -> dict[str, list[str]]:
        """Violation messages grouped by field, in the order they were found."""
        grouped: dict[str, list[str]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.field, []).append(violation.message)
        return grouped

    def to_dict(self) -> dict:
        return {**super().to_dict(), "errors": self.errors}


class AuthenticationError(AuthServiceError):
    """Raised when the caller cannot be authenticated.

    The message never says which credential was wrong.
    """

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthenticated."):
        super().__init__(message)
