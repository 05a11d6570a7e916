"""
API error definitions and the exception handlers that render them.

Every error body has a ``message`` key; some errors add fields next to it
(``errors`` for validation failures, ``requiresVerification`` for unverified
logins).
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base exception for API errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code
        extra: Additional top-level fields for the response body
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, **self.extra}


class ValidationError(ApiError):
    """Input failed validation; ``errors`` lists every violation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        super().__init__(message, errors=errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}], message=message)


class Conflict(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class InvalidOrExpiredToken(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid or expired token"


class AlreadyVerified(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already verified"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid authentication credentials"


class InvalidCredentials(Unauthorized):
    default_message = "Invalid credentials"


class VerificationRequired(Unauthorized):
    default_message = "Please verify your email before logging in"

    def __init__(self, email: str):
        super().__init__(requiresVerification=True, email=email)


class InvalidPassword(Unauthorized):
    default_message = "Invalid password"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class NotFoundOrUnauthorized(NotFound):
    """Same answer whether the row is missing or owned by someone else."""

    default_message = "Not found or unauthorized"


class ServerError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


def _field_name(loc) -> str:
    # loc looks like ("body", "title") or ("query", "q")
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "form")]
    return ".".join(parts) or str(loc[-1])


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ApiError as JSON."""
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as a 400 listing every field."""
    errors = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    error = ValidationError(errors)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep HTTPException status codes but use the ``message`` body shape."""
    message = str(exc.detail) if exc.detail else "An error occurred"
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the exception server-side and return a generic 500."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": ServerError.default_message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
