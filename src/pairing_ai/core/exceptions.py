"""Application exceptions and FastAPI exception handlers.

Every non-2xx response of the service uses the same ``ErrorResponse``
envelope. The chat endpoint never raises these for collaborator failures; it
degrades to a fallback answer instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from pairing_ai.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request

logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """Structured error detail for validation errors."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppException(Exception):
    """Base application exception rendered as an ``ErrorResponse``."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="BAD_REQUEST",
            message=message,
        )


class ServiceUnavailableException(AppException):
    """A component needed to serve the request is not available."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="SERVICE_UNAVAILABLE",
            message=message,
        )


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> ORJSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=getattr(request.state, "request_id", None),
    )
    return ORJSONResponse(status_code=status_code, content=body.model_dump())


async def _handle_app_exception(request: Request, exc: AppException) -> ORJSONResponse:
    return _error_response(request, exc.status_code, exc.error, exc.message, exc.details)


async def _handle_http_exception(
    request: Request,
    exc: StarletteHTTPException,
) -> ORJSONResponse:
    return _error_response(request, exc.status_code, "HTTP_ERROR", str(exc.detail))


async def _handle_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> ORJSONResponse:
    details = [
        ErrorDetail(
            code="VALIDATION_ERROR",
            message=error["msg"],
            field=".".join(str(part) for part in error["loc"]),
        )
        for error in exc.errors()
    ]
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        details,
    )


async def _handle_unexpected(request: Request, exc: Exception) -> ORJSONResponse:
    logger.opt(exception=exc).error("Unhandled exception", path=request.url.path)
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Render every error as an ``ErrorResponse``."""
    app.add_exception_handler(AppException, _handle_app_exception)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected)
