"""
FastAPI middleware for structured logging with request context.

Automatically:
- Generates request_id for each request (or reads X-Request-ID)
- Extracts trace_id from X-Trace-ID header
- Logs request/response with latency
- Propagates context to all log calls made while handling the request
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from customer_api.observability.logging import RequestContext, get_logger

logger = get_logger(__name__)

# Paths excluded from request logs (probe/scrape noise)
EXCLUDED_PATHS = {
    "/health",
    "/metrics",
    "/docs",
    "/redoc",
    "/openapi.json",
}


def should_log(path: str) -> bool:
    """Check if request should be logged."""
    return path not in EXCLUDED_PATHS


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for automatic request logging with structured context.

    Returns X-Request-ID and X-Trace-ID in response headers for client-side
    correlation. The authenticated user email is bound by the auth
    dependency once the token is verified.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or f"req_{uuid.uuid4().hex[:16]}"
        trace_id = request.headers.get("x-trace-id") or f"trace_{uuid.uuid4().hex[:16]}"
        log_request = should_log(request.url.path)

        with RequestContext(request_id=request_id, trace_id=trace_id):
            start_time = time.perf_counter()

            if log_request:
                logger.info(
                    "HTTP request started",
                    method=request.method,
                    path=request.url.path,
                    client_host=request.client.host if request.client else None,
                )

            try:
                response = await call_next(request)
            except Exception as exc:
                latency_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    "HTTP request failed",
                    method=request.method,
                    path=request.url.path,
                    latency_ms=round(latency_ms, 2),
                    exception_type=type(exc).__name__,
                    exc_info=True,
                )
                raise

            latency_ms = (time.perf_counter() - start_time) * 1000
            if log_request:
                logger.info(
                    "HTTP request completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    latency_ms=round(latency_ms, 2),
                )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Trace-ID"] = trace_id
            return response


class SlowRequestLogger(BaseHTTPMiddleware):
    """
    Logs requests exceeding latency thresholds.

    - WARNING: above warning_threshold_ms
    - ERROR: above error_threshold_ms
    """

    def __init__(
        self,
        app: ASGIApp,
        warning_threshold_ms: float = 500.0,
        error_threshold_ms: float = 2000.0,
    ):
        super().__init__(app)
        self.warning_threshold_ms = warning_threshold_ms
        self.error_threshold_ms = error_threshold_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        latency_ms = (time.perf_counter() - start_time) * 1000

        if latency_ms > self.error_threshold_ms:
            logger.error(
                "Slow request detected (exceeds error threshold)",
                method=request.method,
                path=request.url.path,
                latency_ms=round(latency_ms, 2),
                threshold_ms=self.error_threshold_ms,
                status_code=response.status_code,
            )
        elif latency_ms > self.warning_threshold_ms:
            logger.warning(
                "Slow request detected (exceeds warning threshold)",
                method=request.method,
                path=request.url.path,
                latency_ms=round(latency_ms, 2),
                threshold_ms=self.warning_threshold_ms,
                status_code=response.status_code,
            )

        return response
