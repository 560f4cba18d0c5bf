"""
Centralized error types and JSON error responses.

Every error the API returns goes through one of the handlers registered by
`register_exception_handlers`, so all error bodies share three shapes:

    {"error": "..."}
    {"errors": [{"location", "path", "msg", "value"}, ...]}
    {"error": "Duplicate key", "details": {...}}
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class RequestValidationFailed(AppError):
    """One or more request fields failed validation."""
    def __init__(self, errors: list[dict]):
        self.errors = errors
        super().__init__("Validation failed", status_code=400)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Not found", details: dict | None = None):
        super().__init__(message, status_code=404, details=details)


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials."""
    def __init__(self, message: str = "Invalid token", details: dict | None = None):
        super().__init__(message, status_code=401, details=details)


class ForbiddenError(AppError):
    """Authenticated, but the role does not allow the operation."""
    def __init__(self, message: str = "Forbidden", details: dict | None = None):
        super().__init__(message, status_code=403, details=details)


class ConflictError(AppError):
    """A business-level conflict reported with a plain message."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class DuplicateKeyError(AppError):
    """A unique key already exists in the store."""
    def __init__(self, details: dict | None = None):
        super().__init__("Duplicate key", status_code=400, details=details)


ERROR_MESSAGES = {
    # Authentication
    "no_token": "No token provided",
    "invalid_token": "Invalid token",
    "invalid_credentials": "Invalid credentials",
    "email_exists": "Email already registered",
    "forbidden": "Forbidden",

    # Records
    "candidate_not_found": "Candidate not found",
    "interview_not_found": "Interview not found",

    # General
    "not_found": "Not found",
    "duplicate_key": "Duplicate key",
    "server_error": "Server error",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-facing error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def create_error_response(
    status_code: int,
    message: str,
    details: dict | None = None
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {"error": message}

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content
    )


_DUPLICATE_SIGNATURES = ("unique constraint", "duplicate entry", "duplicate key")


def is_duplicate_key_error(error: Exception) -> bool:
    """True when a database error reports a unique-key violation."""
    if not isinstance(error, IntegrityError):
        return False
    root = getattr(error, "orig", None) or error
    error_str = str(root).lower()
    return any(sig in error_str for sig in _DUPLICATE_SIGNATURES)


def _field_errors_from_framework(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        loc = list(err.get("loc") or ())
        location = str(loc[0]) if loc else "body"
        path = ".".join(str(part) for part in loc[1:])
        errors.append({
            "location": location,
            "path": path,
            "msg": err.get("msg") or "Invalid value",
            "value": None,
        })
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationFailed)
    async def request_validation_failed_handler(request: Request, exc: RequestValidationFailed):
        return JSONResponse(status_code=400, content={"errors": exc.errors})

    @app.exception_handler(RequestValidationError)
    async def framework_validation_handler(request: Request, exc: RequestValidationError):
        # Raised by FastAPI itself, e.g. for a body that is not valid JSON.
        return JSONResponse(status_code=400, content={"errors": _field_errors_from_framework(exc)})

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        return create_error_response(400, get_error_message("duplicate_key"), exc.details or None)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return create_error_response(exc.status_code, exc.message, exc.details or None)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unmatched paths and methods both read as "Not found".
        if exc.status_code in (404, 405):
            return create_error_response(404, get_error_message("not_found"))
        return create_error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        if is_duplicate_key_error(exc):
            logger.warning("Duplicate key on %s %s: %s", request.method, request.url.path, exc.orig)
            return create_error_response(400, get_error_message("duplicate_key"))
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return create_error_response(500, get_error_message("server_error"))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return create_error_response(500, get_error_message("server_error"))
