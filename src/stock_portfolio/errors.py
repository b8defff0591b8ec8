"""Application error taxonomy and its HTTP rendering.

Every error carries a status code and a message that is safe to show to a
client. Detail meant for operators goes to the log, never into the message.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AppError(Exception):
    """Base class for errors rendered as ``{"error": message}``."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed request fields."""

    status_code = 400
    default_message = "Invalid request"


class AuthenticationFailure(AppError):
    """Bad credentials or a missing/invalid/expired token."""

    status_code = 401
    default_message = "Authentication required"


class AuthorizationFailure(AppError):
    """Valid identity, wrong role for the path.

    The access gate answers this with a redirect to the role's home; it only
    surfaces as a 403 if raised outside the gate.
    """

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"


class UpstreamError(AppError):
    """Persistence or third-party API failure."""

    status_code = 502
    default_message = "Upstream service error"


class ConfigurationError(RuntimeError):
    """Startup cannot continue (e.g. no signing secret)."""


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or unparsable request data is a plain 400, not FastAPI's 422."""
    logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.errors())
    return await app_error_handler(request, ValidationError("Invalid request"))


def register_error_handlers(app: FastAPI) -> None:
    """Render AppError subclasses and request validation failures as JSON error bodies."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
