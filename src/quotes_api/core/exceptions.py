"""Custom exceptions and exception handlers.

This module provides structured exception handling with:
- HTTP-facing exception classes carrying status, error code and message
- FastAPI exception handlers for consistent error responses
- Translation of domain errors raised by the services
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from quotes_api.database.repositories.base import InvalidSortFieldError
from quotes_api.observability.logging import get_logger
from quotes_api.services.authors.exceptions import (
    AuthorAlreadyExistsError,
    AuthorNotFoundError,
    InvalidAuthorNameError,
)
from quotes_api.services.pairs.exceptions import PairCountError
from quotes_api.services.quotes.exceptions import (
    InvalidQuoteTextError,
    QuoteNotFoundError,
)


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
    """Base application exception.

    All HTTP-facing exceptions inherit from this class for consistent
    error handling.
    """

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


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, resource: str, identifier: Any) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error="NOT_FOUND",
            message=f"{resource} with identifier '{identifier}' not found",
        )


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str, error: str = "BAD_REQUEST") -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error=error,
            message=message,
        )


class ConflictException(AppException):
    """Resource conflict exception."""

    def __init__(self, message: str) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error="CONFLICT",
            message=message,
        )


class ServiceUnavailableException(AppException):
    """Service unavailable exception."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="SERVICE_UNAVAILABLE",
            message=message,
        )


def to_app_exception(exc: Exception) -> AppException | None:
    """Map a domain error from the service layer onto its HTTP exception.

    Returns None for exceptions that have no HTTP meaning of their own.
    """
    if isinstance(exc, QuoteNotFoundError):
        return NotFoundException("Quote", exc.quote_id)
    if isinstance(exc, AuthorNotFoundError):
        return NotFoundException("Author", exc.author_id)
    if isinstance(exc, AuthorAlreadyExistsError):
        return ConflictException(str(exc))
    if isinstance(exc, InvalidSortFieldError):
        return BadRequestException(str(exc), error="INVALID_SORT_FIELD")
    if isinstance(exc, (InvalidAuthorNameError, InvalidQuoteTextError)):
        return BadRequestException(str(exc), error="VALIDATION_ERROR")
    return None


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def _render(request: Request, exc: AppException) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.error,
            message=exc.message,
            details=exc.details,
            request_id=_get_request_id(request),
        ).model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        """Handle custom application exceptions."""
        return _render(request, exc)

    async def domain_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle domain errors that escaped an endpoint untranslated."""
        mapped = to_app_exception(exc)
        if mapped is None:
            return await general_exception_handler(request, exc)
        return _render(request, mapped)

    for domain_error in (
        QuoteNotFoundError,
        AuthorNotFoundError,
        AuthorAlreadyExistsError,
        InvalidAuthorNameError,
        InvalidQuoteTextError,
        InvalidSortFieldError,
    ):
        app.add_exception_handler(domain_error, domain_exception_handler)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle Starlette HTTP exceptions."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error="HTTP_ERROR",
                message=str(exc.detail),
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Handle Pydantic validation errors."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return ORJSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(
                error="VALIDATION_ERROR",
                message="Request validation failed",
                details=details,
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(PairCountError)
    async def pair_count_exception_handler(
        request: Request,
        exc: PairCountError,
    ) -> ORJSONResponse:
        """Malformed frequency data is a storage-layer bug, not a client error."""
        logger.error("Invalid length-frequency data", error=str(exc))
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions."""
        logger.opt(exception=exc).error("Unhandled exception")

        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
                request_id=_get_request_id(request),
            ).model_dump(),
        )
