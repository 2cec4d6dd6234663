"""
Global exception handling for the application.
Every error leaves the API as {code, message, timestamp, path}.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class RequestValidationException(AppError):
    """Malformed or out-of-range request fields."""
    def __init__(self, errors: List[Dict[str, str]], message: str = "Request validation failed"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)
        self.errors = errors


class PreconditionException(AppError):
    """Required seed data or setup is missing. Retrying will not help."""
    def __init__(self, message: str = "Precondition failed"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class DatabaseException(AppError):
    """Persistence layer failure."""
    def __init__(self, message: str = "Database error", status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(message, status_code)

    @classmethod
    def from_sqlalchemy(cls, exc: SQLAlchemyError) -> "DatabaseException":
        if isinstance(exc, IntegrityError):
            return cls("Database constraint violated", status.HTTP_409_CONFLICT)
        return cls()


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into [{field, message}]."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        formatted.append({"field": ".".join(loc) or "body", "message": error.get("msg", "Invalid value")})
    return formatted


def _to_app_error(exc: Exception) -> AppError:
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, RequestValidationError):
        return RequestValidationException(format_validation_errors(exc.errors()))
    if isinstance(exc, StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else INTERNAL_ERROR_MESSAGE
        return AppError(message, exc.status_code)
    if isinstance(exc, SQLAlchemyError):
        return DatabaseException.from_sqlalchemy(exc)
    return AppError(INTERNAL_ERROR_MESSAGE)


def error_body(status_code: int, message: str, path: str) -> Dict[str, Any]:
    return {
        "code": status_code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "path": path,
    }


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    error = _to_app_error(exc)
    content = error_body(error.status_code, error.message, request.url.path)
    if isinstance(error, RequestValidationException):
        content["errors"] = error.errors

    if error.status_code >= 500:
        logger.error(
            "Internal error",
            method=request.method,
            path=request.url.path,
            error=repr(exc),
            exc_info=exc,
        )
    else:
        logger.warning(
            "Business exception",
            method=request.method,
            path=request.url.path,
            response=content,
        )

    headers = getattr(exc, "headers", None)
    return JSONResponse(status_code=error.status_code, content=content, headers=headers)
