"""
Request logging middleware.

Assigns every request a correlation id, published three ways:
request.state.request_id (read by the error envelope), the request_id
ContextVar (stamped on every log record) and the X-Request-ID response
header. Logs one line when the request arrives and one when the
response leaves.

Unexpected exceptions escaping a route are turned into the 500 error
envelope here, so those responses still pass back through the security
header and CORS middleware wrapped around this one.
"""

import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_api.shared.errors.handlers import client_address, unexpected_error_response
from todo_api.shared.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with a correlation id and logs its outcome."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(uuid4())
        request.state.request_id = request_id
        started_at = time.perf_counter()
        token = request_id_var.set(request_id)

        logger.info(
            "--> %s %s ip=%s ua=%s",
            request.method,
            request.url.path,
            client_address(request),
            request.headers.get("user-agent", "-"),
        )

        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = unexpected_error_response(
                    request, request.app.state.settings, exc
                )

            logger.info(
                "<-- %d %.1fms %s",
                response.status_code,
                (time.perf_counter() - started_at) * 1000,
                "ERROR" if response.status_code >= 400 else "SUCCESS",
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)
