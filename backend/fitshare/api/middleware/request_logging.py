"""
Request Logging Middleware

Binds a request id, method and path to the structlog context for the
lifetime of each request, logs one line per completed request, and echoes
the id back in the `X-Request-ID` header.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from fitshare.shared.core.logging import clear_log_context, get_logger, log_context

logger = get_logger("http")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Per-request log context and access log."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        clear_log_context()
        log_context(request_id=request_id, method=request.method, path=request.url.path)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info("Request completed", status_code=response.status_code, duration_ms=duration_ms)
        clear_log_context()
        return response
