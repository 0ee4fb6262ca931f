"""
Prometheus middleware for automatic request metric tracking.
"""

import logging
import re
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from customer_api.observability.metrics import http_requests_active, track_request

logger = logging.getLogger(__name__)

_CUSTOMER_ID_SEGMENT = re.compile(r"^/customers/[^/]+")


def normalize_endpoint(path: str) -> str:
    """
    Normalize endpoint path for metric cardinality.

    Examples:
        /customers/42 → /customers/{customer_id}
        /customers → /customers (unchanged)
    """
    return _CUSTOMER_ID_SEGMENT.sub("/customers/{customer_id}", path)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Tracks request latency (histogram), count (counter) and in-flight
    requests (gauge).
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        endpoint = normalize_endpoint(request.url.path)
        method = request.method

        http_requests_active.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response

        except Exception as exc:
            logger.error(f"Request failed: {exc}", exc_info=True)
            raise

        finally:
            http_requests_active.labels(method=method, endpoint=endpoint).dec()
            track_request(
                method=method,
                endpoint=endpoint,
                status_code=status_code,
                duration_seconds=time.perf_counter() - start_time,
            )
