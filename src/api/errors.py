"""Exception handlers that render service errors as JSON."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.exceptions import AuthenticationError, AuthServiceError, ValidationFailedError
from src.services.validation import Constraint, Violation

logger = logging.getLogger(__name__)


def violation_from_pydantic(error: dict) -> Violation:
    """Turn one pydantic error into a field violation."""
    loc = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
    field = loc[-1] if loc else "body"
    label = field.replace("_", " ")
    if error.get("type") == "missing":
        return Violation(field, Constraint.REQUIRED, f"The {label} field is required.")
    return Violation(field, Constraint.FORMAT, error.get("msg", f"The {label} is invalid."))


async def auth_service_error_handler(request: Request, exc: AuthServiceError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    violations = [violation_from_pydantic(error) for error in exc.errors()]
    logger.debug(f"Malformed request to {request.url.path}: {len(violations)} violations")
    return await auth_service_error_handler(request, ValidationFailedError(violations))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""
    app.add_exception_handler(AuthServiceError, auth_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
