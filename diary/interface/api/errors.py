"""Centralized exception handlers for the FastAPI application.

Domain and adapter exceptions are mapped to HTTP responses with a
consistent body:

    {
        "detail": "Human-readable error message",
        "code": "machine_readable_code",
        ...extra flags (e.g. "requires_verification": true)
    }
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from diary.adapter.error import AdapterError, InvalidProviderToken
from diary.domain.error import (
    AuthenticationError,
    BusinessRuleViolationError,
    ConflictError,
    DependencyError,
    DomainError,
    NotFoundError,
    OtpError,
    OtpMismatch,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order, first isinstance match wins
DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int, str]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, "validation_error"),
    (ConflictError, status.HTTP_400_BAD_REQUEST, "conflict"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (BusinessRuleViolationError, status.HTTP_403_FORBIDDEN, "business_rule_violation"),
    (DependencyError, status.HTTP_500_INTERNAL_SERVER_ERROR, "dependency_error"),
]


def error_response(
    status_code: int, message: str, code: str, **extra
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code, **extra},
    )


def _describe(exc: DomainError) -> tuple[int, str, dict]:
    if isinstance(exc, AuthenticationError):
        return status.HTTP_400_BAD_REQUEST, exc.reason, exc.extra
    if isinstance(exc, OtpMismatch):
        return (
            status.HTTP_400_BAD_REQUEST,
            exc.code,
            {"attempts_remaining": exc.attempts_remaining},
        )
    if isinstance(exc, OtpError):
        return status.HTTP_400_BAD_REQUEST, exc.code, {}
    for error_type, status_code, code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code, code, {}
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", {}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance
    """

    @app.exception_handler(DomainError)
    async def domain_exception_handler(
        request: Request, exc: DomainError
    ) -> JSONResponse:
        status_code, code, extra = _describe(exc)
        message = str(exc)

        if status_code >= 500:
            logger.error(
                "Domain error on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                message,
                code,
            )
            if code == "internal_error":
                message = "An internal error occurred"
        else:
            logger.warning(
                "Domain exception on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                message,
                code,
            )

        return error_response(status_code, message, code, **extra)

    @app.exception_handler(AdapterError)
    async def adapter_exception_handler(
        request: Request, exc: AdapterError
    ) -> JSONResponse:
        if isinstance(exc, InvalidProviderToken):
            logger.warning(
                "Provider token rejected on %s %s: %s",
                request.method,
                request.url.path,
                exc,
            )
            return error_response(
                status.HTTP_400_BAD_REQUEST,
                "Invalid or expired sign-in token",
                "invalid_token",
            )

        logger.error(
            "External service error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An external service is unavailable. Please try again later",
            "dependency_error",
        )

    @app.exception_handler(RequestValidationError)
    @app.exception_handler(PydanticValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError | PydanticValidationError
    ) -> JSONResponse:
        errors = [
            {
                "loc": [str(part) for part in error.get("loc", ())],
                "msg": error.get("msg", "").removeprefix("Value error, "),
            }
            for error in exc.errors()
        ]
        message = errors[0]["msg"] if errors else "Invalid request"
        return error_response(
            status.HTTP_400_BAD_REQUEST, message, "validation_error", errors=errors
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal error occurred",
            "internal_error",
        )
