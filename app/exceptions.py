# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized error handling for the API.
# Services raise these exceptions; the handlers registered in app/main.py are
# the single place where they become HTTP responses of the shape:
#   {"success": false, "error": "<message>"}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class DevCamperException(Exception):
    """
    Base exception for the DevCamper API.

    All custom exceptions inherit from this class and carry the HTTP status
    they should be reported with.
    """

    def __init__(
        self,
        message: str,
        code: str = "DEVCAMPER_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {
            "success": False,
            "error": self.message,
        }


# =============================================================================
# Resource Exceptions
# =============================================================================

class ResourceNotFoundError(DevCamperException):
    """Raised when no record matches an id (or the id is malformed)."""

    def __init__(self, resource_id: str, resource: str = "Resource"):
        super().__init__(
            message=f"{resource} not found with id of {resource_id}",
            code="NOT_FOUND",
            status_code=404,
            details={"id": resource_id},
        )


class ValidationFailedError(DevCamperException):
    """Raised when a document fails schema validation."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"errors": errors or []},
        )


class DuplicateKeyError(DevCamperException):
    """Raised when a write violates a unique index."""

    def __init__(self, message: str = "Duplicate field value entered"):
        super().__init__(
            message=message,
            code="DUPLICATE_KEY",
            status_code=400,
        )


class BootcampAlreadyPublishedError(DevCamperException):
    """Raised when a non-admin user tries to publish a second bootcamp."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"The user with ID {user_id} has already published a bootcamp",
            code="BOOTCAMP_ALREADY_PUBLISHED",
            status_code=400,
            details={"user_id": user_id},
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class NotAuthenticatedError(DevCamperException):
    """Raised when a request carries no valid bearer token."""

    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(
            message=message,
            code="NOT_AUTHENTICATED",
            status_code=401,
        )


class InvalidCredentialsError(DevCamperException):
    """Raised for both unknown emails and wrong passwords."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class ForbiddenError(DevCamperException):
    """Raised when the user's role or ownership does not allow the action."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
        )


class EmailNotFoundError(DevCamperException):
    """Raised when a password reset is requested for an unknown email."""

    def __init__(self, email: str):
        super().__init__(
            message="There is no user with that email",
            code="EMAIL_NOT_FOUND",
            status_code=404,
            details={"email": email},
        )


class InvalidResetTokenError(DevCamperException):
    """Raised when a password reset token is unknown or expired."""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_RESET_TOKEN",
            status_code=400,
        )


class EmailDeliveryError(DevCamperException):
    """Raised when the reset email could not be sent."""

    def __init__(self, error: str):
        super().__init__(
            message="Email could not be sent",
            code="EMAIL_DELIVERY_ERROR",
            status_code=500,
            details={"error": error},
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class UploadError(DevCamperException):
    """Raised when an uploaded photo is missing or has the wrong type."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(
            message=message,
            code="UPLOAD_ERROR",
            status_code=status_code,
        )


class PhotoTooLargeError(UploadError):
    """Raised when an uploaded photo exceeds MAX_FILE_UPLOAD."""

    def __init__(self, max_bytes: int):
        super().__init__(f"Please upload an image less than {max_bytes} bytes")
        self.details = {"max_bytes": max_bytes}


# =============================================================================
# Collaborator Exceptions
# =============================================================================

class GeocodingError(DevCamperException):
    """Raised when an address or postal code cannot be geocoded."""

    def __init__(self, query: str, error: str):
        super().__init__(
            message=f"Could not geocode location: {query}",
            code="GEOCODING_ERROR",
            status_code=400,
            details={"query": query, "error": error},
        )


# =============================================================================
# Helpers
# =============================================================================

def format_validation_errors(errors: list[dict[str, Any]]) -> list[str]:
    """
    Turn pydantic error dicts into readable messages.

    Body-level location prefixes ("body") are dropped so a missing field
    reads "name: Field required".
    """
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        msg = error.get("msg", "Invalid value")
        messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return messages


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


# =============================================================================
# Exception Handlers
# =============================================================================

async def devcamper_exception_handler(
    request: Request,
    exc: DevCamperException
) -> JSONResponse:
    """Convert DevCamperException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")
    return _error_response(exc.status_code, exc.message)


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request and model validation errors.

    Both FastAPI's RequestValidationError and pydantic's ValidationError
    become a 400 with the messages joined by ", ".
    """
    if isinstance(exc, (RequestValidationError, ValidationError)):
        messages = format_validation_errors(exc.errors())
    else:
        messages = [str(exc)]
    return _error_response(400, ", ".join(messages) or "Validation error")


async def duplicate_key_exception_handler(
    request: Request,
    exc: MongoDuplicateKeyError
) -> JSONResponse:
    """Handle unique index violations raised by the driver."""
    logger.info(f"Duplicate key on {request.method} {request.url.path}")
    return _error_response(400, "Duplicate field value entered")


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Keep framework errors (404 routes, 405 methods) in the same envelope."""
    return _error_response(exc.status_code, str(exc.detail))


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return _error_response(500, "Server Error")
