"""Error Handlers — global exception handlers for the Messagely API.

Invariants:
    - MessagelyError → structured JSON; status from the error (ERROR_STATUS table)
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → never leaks internal details
    - 401 responses carry WWW-Authenticate: Bearer

Design Decisions:
    - Three-layer handler: domain (MessagelyError), validation (Pydantic), catch-all (Exception)
    - Log level follows severity: policy denials are warnings, store outages are errors
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from messagely.core.errors import ErrorSeverity, MessagelyError

logger = logging.getLogger(__name__)

_LOG_LEVEL = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_messagely_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_messagely_error_handler(app: FastAPI) -> None:
    """Register Messagely domain/infrastructure error handler."""

    @app.exception_handler(MessagelyError)
    async def messagely_error_handler(request: Request, exc: MessagelyError):
        """Handle all Messagely domain/infrastructure errors."""
        logger.log(
            _LOG_LEVEL[exc.severity],
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "username": exc.context.username,
                "message_id": exc.context.message_id,
            },
        )
        headers = None
        if exc.http_status == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {type(exc).__name__}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "kind": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response.

    Input values are left out: login and register payloads carry passwords.
    """
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "kind": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
