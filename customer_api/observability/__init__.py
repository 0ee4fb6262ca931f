"""
Observability infrastructure.

Components:
- logging.py: Structured JSON logging with request context
- logging_middleware.py: Request logging and slow request detection
- metrics.py: Prometheus metrics (counters, histograms, gauges)
- middleware.py: Automatic HTTP metric tracking
"""

from customer_api.observability.metrics import (
    generate_metrics,
    track_auth_event,
    track_error,
    track_request,
)

__all__ = [
    "generate_metrics",
    "track_auth_event",
    "track_error",
    "track_request",
]
