"""
Centralized error handlers for FastAPI.

This is the only place where an error kind becomes an HTTP status.
Storage errors pass through the service unchanged and are mapped here.
All error responses are a JSON object with a single ``error`` field.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from usersapi.domain.users.errors import StorageError, UserNotFoundError

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_500 = 500


def _error_response(status_code: int, error: str) -> JSONResponse:
    """Build a consistent JSON error response."""
    return JSONResponse(status_code=status_code, content={"error": error})


def _describe_validation(exc: RequestValidationError) -> str:
    """Condense pydantic validation errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_bad_request(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed body or path parameter."""
        message = _describe_validation(exc)
        logger.info("Bad request: %s", message)
        return _error_response(HTTP_400, message)

    @app.exception_handler(UserNotFoundError)
    async def handle_user_not_found(
        _request: Request, exc: UserNotFoundError
    ) -> JSONResponse:
        logger.info("User not found: %s", exc.user_id)
        return _error_response(HTTP_404, exc.message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(
        _request: Request, exc: StorageError
    ) -> JSONResponse:
        """Storage failures expose their message to the caller."""
        logger.error("Storage error: %s", exc.message)
        return _error_response(HTTP_500, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing-level errors (unknown path, wrong method)."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
