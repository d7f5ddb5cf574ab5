# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Validation, conflict and not-found errors carry specific messages; everything
# else is collapsed into a generic message so internals never leak to clients.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.models.user import ALLOWED_ROLES

logger = logging.getLogger(__name__)


class UserDirectoryException(Exception):
    """
    Base exception for the User Directory API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "USER_DIRECTORY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# User Exceptions
# =============================================================================

class ValidationFailedError(UserDirectoryException):
    """Raised when request input is missing or malformed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion="Provide a non-empty name, email and a role of developer, designer, manager or admin",
            details=details,
        )


class EmailExistsError(UserDirectoryException):
    """Raised when a user with the same email is already stored."""

    def __init__(self, email: str):
        super().__init__(
            message="Email already exists",
            code="EMAIL_EXISTS",
            status_code=400,
            suggestion="Use a different email address",
            details={"email": email},
        )


class UserNotFoundError(UserDirectoryException):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the user id is correct and the user hasn't been deleted",
            details={"user_id": user_id},
        )


class StoreUnavailableError(UserDirectoryException):
    """
    Raised when the store fails for any reason other than a known constraint.

    The message is the generic per-operation text shown to clients; the
    underlying error is only logged.
    """

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="STORE_ERROR",
            status_code=500,
        )


class RateLimitExceededError(UserDirectoryException):
    """Raised when a client exceeds its request allowance."""

    def __init__(self, limit: int, retry_after: int):
        super().__init__(
            message="Too many requests, please try again later.",
            code="RATE_LIMITED",
            status_code=429,
            suggestion=f"Wait {retry_after} seconds before retrying",
            details={"limit": limit, "retry_after": retry_after},
            headers={"Retry-After": str(retry_after)},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

def error_response(exc: UserDirectoryException) -> JSONResponse:
    """Render a UserDirectoryException as a JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def user_directory_exception_handler(
    request: Request,
    exc: UserDirectoryException
) -> JSONResponse:
    """
    Convert UserDirectoryException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return error_response(exc)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body validation errors.

    Missing or malformed fields are a client error (400), reported with the
    names of the offending fields.
    """
    errors = exc.errors()
    fields = sorted({str(error["loc"][-1]) for error in errors if error.get("loc")})
    error_types = {error.get("type") for error in errors}

    if error_types & {"missing", "string_too_short"}:
        message = "Name, email, and role are required"
    elif "role" in fields:
        message = "Role must be one of: " + ", ".join(ALLOWED_ROLES)
    else:
        message = "Invalid request body"

    return error_response(ValidationFailedError(message, details={"fields": fields}))


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Handle routing errors (unknown path, wrong method)."""
    if exc.status_code == 404:
        content = {"error": "Route not found", "code": "ROUTE_NOT_FOUND"}
    elif exc.status_code == 405:
        content = {"error": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}
    else:
        content = {"error": str(exc.detail), "code": "HTTP_ERROR"}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions without exposing internals."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Something went wrong!",
            "code": "INTERNAL_ERROR",
        },
        # ServerErrorMiddleware sits outside SecurityHeadersMiddleware
        headers=getattr(request.app.state, "security_headers", None),
    )
