"""Error envelope and HTTP mapping for the section service.

Library errors carry a short code of their own; the service folds them into
four public codes:

    TimestampValidationError          -> 422 INVALID_TIMESTAMPS (reason=<code>)
    SectionConfigError                -> 422 INVALID_CONFIG
    SectionRuntimeError               -> 422 INVALID_INPUT (reason=<code>)
    SectionRuntimeError (boundaries)  -> 500 INTERNAL_ERROR
    anything else                     -> 500 INTERNAL_ERROR
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sections.errors import SectionConfigError, SectionError, SectionRuntimeError
from timing.errors import TimestampValidationError, TimingError

from .schemas import ApiErrorResponse, ErrorDetail


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error with its HTTP status and public error code.

    Attributes:
        status_code: HTTP status code to return.
        code: Public error code.
        message: Human-readable error message.
        details: Optional additional context.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


class InvalidInputError(ApiError):
    """Raised when a request body is unusable before it reaches the engine."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(422, "INVALID_INPUT", message, details)


def map_exception_to_api_error(exc: Exception) -> ApiError:
    """Translate a library or unexpected exception into an ApiError."""
    if isinstance(exc, ApiError):
        return exc

    if isinstance(exc, TimestampValidationError):
        return ApiError(422, "INVALID_TIMESTAMPS", exc.message, {"reason": exc.code, **exc.details})

    if isinstance(exc, SectionConfigError):
        return ApiError(422, "INVALID_CONFIG", exc.message, exc.details)

    if isinstance(exc, SectionRuntimeError):
        # Internal fault, not bad input.
        if exc.code == "INCONSISTENT_BOUNDARIES":
            return ApiError(500, "INTERNAL_ERROR", exc.message, exc.details)
        return ApiError(422, "INVALID_INPUT", exc.message, {"reason": exc.code, **exc.details})

    return ApiError(
        500,
        "INTERNAL_ERROR",
        str(exc) or "An unexpected error occurred",
        {"exception_type": type(exc).__name__},
    )


async def error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any handled exception as the JSON error envelope."""
    request_id = getattr(request.state, "request_id", "unknown")
    api_error = map_exception_to_api_error(exc)

    if api_error.status_code >= 500:
        logger.error(
            "Request failed: code=%s message=%s",
            api_error.code,
            api_error.message,
            exc_info=exc,
        )
    else:
        logger.warning("Request rejected: code=%s message=%s", api_error.code, api_error.message)

    body = ApiErrorResponse(
        error=ErrorDetail(code=api_error.code, message=api_error.message, details=api_error.details)
    )
    return JSONResponse(
        status_code=api_error.status_code,
        content=body.model_dump(),
        headers={"X-Request-ID": request_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Route API, timing and section errors (and anything else) to error_handler."""
    for exc_class in (ApiError, TimingError, SectionError, Exception):
        app.add_exception_handler(exc_class, error_handler)
