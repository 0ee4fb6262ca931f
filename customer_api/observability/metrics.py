"""
Prometheus metrics.

Metrics tracked:
- Request latency (histogram) per endpoint
- Request count (counter) with status codes
- Active requests (gauge)
- Authentication events (counter) by event and outcome
- Error rates (counter) by error type

Exposed via the /metrics endpoint.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# ============================================================================
# REQUEST METRICS
# ============================================================================

# Buckets cover both fast store reads and bcrypt-bound register/login
http_request_duration_seconds = Histogram(
    "customer_api_http_request_duration_seconds",
    "HTTP request latency in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(
        0.001,
        0.005,
        0.010,
        0.025,
        0.050,
        0.100,
        0.250,
        0.500,
        1.000,
        2.500,
    ),
)

http_requests_total = Counter(
    "customer_api_http_requests_total",
    "Total HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

http_requests_active = Gauge(
    "customer_api_http_requests_active",
    "Number of in-flight HTTP requests",
    labelnames=["method", "endpoint"],
)

# ============================================================================
# AUTHENTICATION METRICS
# ============================================================================

# event: register | login | verify
# outcome: success | rejected | duplicate | invalid_user | invalid_password |
#          missing | invalid | error
auth_events_total = Counter(
    "customer_api_auth_events_total",
    "Authentication events by outcome",
    labelnames=["event", "outcome"],
)

# ============================================================================
# ERROR METRICS
# ============================================================================

errors_total = Counter(
    "customer_api_errors_total",
    "Total errors by type",
    labelnames=["error_type", "endpoint"],
)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def track_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """
    Track HTTP request metrics.

    Args:
        method: HTTP method (GET, POST, ...)
        endpoint: Normalized endpoint path
        status_code: HTTP status code
        duration_seconds: Request duration in seconds
    """
    http_request_duration_seconds.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).observe(duration_seconds)

    http_requests_total.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()


def track_auth_event(event: str, outcome: str) -> None:
    """Count a register/login/verify outcome."""
    auth_events_total.labels(event=event, outcome=outcome).inc()


def track_error(error_type: str, endpoint: str) -> None:
    """Count an error surfaced at the handler boundary."""
    errors_total.labels(error_type=error_type, endpoint=endpoint).inc()


def generate_metrics() -> tuple[bytes, str]:
    """
    Render all registered metrics.

    Returns:
        tuple: (payload, content type) for the /metrics response
    """
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
