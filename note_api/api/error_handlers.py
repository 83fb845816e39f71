# This file defines the API error taxonomy and the handlers that render it.
# It exists so every endpoint returns the same error shape with request trace fields.
# Services raise the typed errors below; the handlers translate them into status codes and JSON bodies.
# Centralized error handling prevents stack traces from leaking in responses.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Domain error type with structured API details."""

    status_code = 500
    error_code = "API_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
        details: Any | None = None,
    ) -> None:
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(APIError):
    """Missing or malformed input."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class ConflictError(APIError):
    """A uniqueness rule was violated."""

    status_code = 400
    error_code = "CONFLICT"


class AuthenticationError(APIError):
    status_code = 401
    error_code = "AUTHENTICATION_FAILED"


class NotFoundError(APIError):
    """The operation targeted an id or email that does not exist."""

    status_code = 404
    error_code = "NOT_FOUND"


class StorageError(APIError):
    """The underlying store failed to execute a statement."""

    status_code = 500
    error_code = "STORAGE_ERROR"


class StorageIntegrityError(StorageError):
    """A store-level constraint rejected the statement."""


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_body(
    *, request: Request, error_code: str, message: str, details: Any | None = None
) -> dict[str, Any]:
    return {
        "error_code": error_code,
        "message": message,
        "details": jsonable_encoder(details),
        "request_id": _request_id(request),
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s on %s %s: %s",
                exc.error_code,
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc,
            )
        else:
            logger.info(
                "%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message
            )
        message = exc.message
        if isinstance(exc, StorageError):
            message = "The store failed to complete the request."
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code=exc.error_code,
                message=message,
                details=exc.details,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                request=request,
                error_code="VALIDATION_ERROR",
                message="Invalid request parameters.",
                details=exc.errors(),
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code="HTTP_ERROR",
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request=request,
                error_code="INTERNAL_SERVER_ERROR",
                message="The server encountered an unexpected error.",
            ),
        )
