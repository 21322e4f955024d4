"""
FastAPI middleware for observability.

CorrelationMiddleware binds the X-Correlation-ID header (or a new ID) to
the request context; RequestLoggingMiddleware logs one line per request
with status and latency.

Dependencies: starlette, support_backend.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from support_backend.observability.correlation import (
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Polled by load balancers; logged at DEBUG only
QUIET_PATH_PREFIXES = ("/api/v1/health",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and latency of every request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.monotonic()
        path = request.url.path
        level = logging.DEBUG if path.startswith(QUIET_PATH_PREFIXES) else logging.INFO

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "%s %s - %s: %s",
                request.method,
                path,
                type(e).__name__,
                e,
                extra={"duration_ms": round((time.monotonic() - started) * 1000, 2)},
            )
            raise

        logger.log(
            level,
            "%s %s - %s",
            request.method,
            path,
            response.status_code,
            extra={
                "status_code": response.status_code,
                "duration_ms": round((time.monotonic() - started) * 1000, 2),
                "client_host": request.client.host if request.client else None,
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Binds a correlation ID to the request and echoes it in the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
