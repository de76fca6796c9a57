"""
Centralized error handlers for FastAPI.

The single place where failures from validation, authentication or
store access become HTTP responses. Every error uses the same envelope:

    {success: false, message, status, timestamp, path,
     errors?, stack?, requestId?}

Unclassified errors are 500s whose detail is only shown in development
mode; the full detail is always logged server-side.
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api.core.config import Settings
from todo_api.domain.todo.errors import (
    DuplicateError,
    ErrorKind,
    NotFoundError,
    ToDoError,
    ValidationFailedError,
)
from todo_api.infrastructure.todo.identifiers import MalformedIdentifierError

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_404 = 404
HTTP_429 = 429
HTTP_500 = 500

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILED: HTTP_400,
    ErrorKind.DUPLICATE: HTTP_400,
    ErrorKind.INVALID_REFERENCE: HTTP_400,
    ErrorKind.MISSING_TOKEN: HTTP_401,
    ErrorKind.INVALID_TOKEN: HTTP_401,
    ErrorKind.EXPIRED_TOKEN: HTTP_401,
    ErrorKind.INVALID_CREDENTIALS: HTTP_401,
    ErrorKind.NOT_FOUND: HTTP_404,
    ErrorKind.RATE_LIMITED: HTTP_429,
    ErrorKind.INTERNAL: HTTP_500,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"
UNIQUE_FIELDS = ("username", "email")
UNIQUE_VIOLATION_MARKERS = ("unique", "duplicate")
REQUEST_LOCATIONS = ("body", "query", "path", "header", "cookie")


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def client_address(request: Request) -> str:
    return request.client.host if request.client else "-"


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def _log_failure(request: Request, status_code: int, exc: Exception) -> None:
    """Log a failure with enough context to find the request again."""
    args = (
        _request_id(request) or "-",
        request.method,
        request.url.path,
        client_address(request),
        status_code,
        type(exc).__name__,
        exc,
    )
    fmt = "[%s] %s %s ip=%s failed with %d: %s: %s"
    if status_code >= HTTP_500:
        logger.error(fmt, *args, exc_info=exc)
    else:
        logger.warning(fmt, *args)


def build_error_response(
    request: Request,
    settings: Settings,
    status_code: int,
    message: str,
    exc: Exception,
    errors: Optional[list[dict[str, Any]]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Build the error envelope and log the failure.

    Args:
        request: The failing request.
        settings: Application settings (development mode adds the stack).
        status_code: HTTP status of the response.
        message: Client-facing message.
        exc: The original exception, logged and (in development) traced.
        errors: Optional field-level validation details.
        headers: Optional extra response headers.

    Returns:
        A JSON response carrying the error envelope.
    """
    _log_failure(request, status_code, exc)

    body: dict[str, Any] = {
        "success": False,
        "message": message,
        "status": status_code,
        "timestamp": _timestamp(),
        "path": request.url.path,
    }
    if errors:
        body["errors"] = errors
    if settings.is_development:
        body["stack"] = "".join(traceback.format_exception(exc))
    request_id = _request_id(request)
    if request_id:
        body["requestId"] = request_id

    return JSONResponse(
        status_code=status_code, content=jsonable_encoder(body), headers=headers
    )


def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in REQUEST_LOCATIONS and len(parts) > 1:
        parts = parts[1:]
    return ".".join(parts)


def _clean_message(message: str) -> str:
    # pydantic prefixes messages raised from custom validators
    return message.removeprefix("Value error, ")


def format_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten every Pydantic violation into {field, message, value}."""
    details = []
    for error in exc.errors():
        value = None if error.get("type") == "missing" else error.get("input")
        details.append(
            {
                "field": _field_name(error.get("loc", ())),
                "message": _clean_message(error.get("msg", "Invalid value")),
                "value": jsonable_encoder(value, custom_encoder={bytes: repr}),
            }
        )
    return details


def _duplicate_field(exc: IntegrityError) -> Optional[str]:
    """Name the unique field an IntegrityError collided on, or None.

    Other constraint failures (NOT NULL, CHECK, foreign keys) are not
    duplicates.
    """
    detail = str(exc.orig).lower()
    if not any(marker in detail for marker in UNIQUE_VIOLATION_MARKERS):
        return None
    for field in UNIQUE_FIELDS:
        if field in detail:
            return field
    return None


def unexpected_error_response(
    request: Request, settings: Settings, exc: Exception
) -> JSONResponse:
    """Build the 500 envelope. Never exposes internals in production."""
    message = str(exc) if settings.is_development else INTERNAL_ERROR_MESSAGE
    return build_error_response(
        request, settings, HTTP_500, message or INTERNAL_ERROR_MESSAGE, exc
    )


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Register every error handler on the FastAPI application.

    Args:
        app: The FastAPI application instance.
        settings: Application settings controlling error verbosity.
    """

    @app.exception_handler(ToDoError)
    async def handle_todo_error(request: Request, exc: ToDoError) -> JSONResponse:
        """Map a domain error to the status of its kind."""
        status_code = STATUS_BY_KIND.get(exc.kind, HTTP_500)
        message = exc.message
        if status_code >= HTTP_500 and not settings.is_development:
            message = INTERNAL_ERROR_MESSAGE
        errors = exc.errors if isinstance(exc, ValidationFailedError) else None
        headers = {"WWW-Authenticate": "Bearer"} if status_code == HTTP_401 else None
        return build_error_response(
            request, settings, status_code, message, exc, errors=errors, headers=headers
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report every violated request rule at once."""
        errors = format_validation_errors(exc)
        fields = sorted({e["field"] for e in errors if e["field"]})
        message = "Validation errors detected"
        if fields:
            message = f"{message}: {', '.join(fields)}"
        error = ValidationFailedError(errors, message)
        return await handle_todo_error(request, error)

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(
        request: Request, exc: IntegrityError
    ) -> JSONResponse:
        """Map a uniqueness violation from the store to Duplicate."""
        field = _duplicate_field(exc)
        if field is None:
            return unexpected_error_response(request, settings, exc)
        error = DuplicateError(field)
        error.__cause__ = exc
        return await handle_todo_error(request, error)

    @app.exception_handler(MalformedIdentifierError)
    async def handle_malformed_identifier(
        request: Request, exc: MalformedIdentifierError
    ) -> JSONResponse:
        """An id that cannot be cast cannot name a resource."""
        error = NotFoundError()
        error.__cause__ = exc
        return await handle_todo_error(request, error)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing-level failures (unmatched route, wrong method)."""
        if exc.status_code == HTTP_404 and exc.detail == "Not Found":
            message = f"Route {request.url.path} not found"
        else:
            message = str(exc.detail)
        return build_error_response(
            request, settings, exc.status_code, message, exc, headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        """Last resort for failures raised outside RequestLoggingMiddleware."""
        return unexpected_error_response(request, settings, exc)
