"""
Structured logging with JSON output.

Features:
- JSON output for log aggregation, console output for development
- Request context propagation (request_id, trace_id, user_email)
- Redaction of credentials and email local parts

Architecture:
- structlog for structured logging
- Context variables for request-scoped data
- Processors for formatting and enrichment
"""

import logging
import sys
import time
import uuid
from contextvars import ContextVar

import structlog
from structlog.types import EventDict, Processor

# Context variables for request-scoped data
# These propagate across async boundaries automatically
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
user_email_var: ContextVar[str | None] = ContextVar("user_email", default=None)
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)

# Service metadata, set by configure_logging()
_service_metadata: dict[str, str] = {
    "service": "customer-api",
    "version": "0.1.0",
    "environment": "development",
}

SENSITIVE_FIELDS = {
    "password",
    "password_hash",
    "authorization",
    "secret",
    "token",
    "jwt_token",
}


# ============================================================================
# CUSTOM PROCESSORS
# ============================================================================


def add_request_context(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add request context to log events.

    Injects:
    - request_id: Unique ID for each HTTP request
    - user_email: Authenticated user (redacted later to its domain)
    - trace_id: Distributed tracing ID
    """
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id

    user_email = user_email_var.get()
    if user_email:
        event_dict["user_email"] = user_email

    trace_id = trace_id_var.get()
    if trace_id:
        event_dict["trace_id"] = trace_id

    return event_dict


def add_timestamp(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add ISO 8601 timestamp with microsecond precision.

    Format: 2025-01-15T10:30:45.123456Z
    """
    event_dict["timestamp"] = (
        time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime())
        + f".{int((time.time() % 1) * 1000000):06d}Z"
    )
    return event_dict


def add_service_metadata(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service, version and environment for filtering in log aggregation."""
    event_dict.update(_service_metadata)
    return event_dict


def redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Redact credentials and PII.

    - password, token, authorization, secret: ***REDACTED***
    - email, user_email: domain only (user@example.com → ***@example.com)
    """
    for key in list(event_dict.keys()):
        lowered = key.lower()
        value = event_dict[key]

        if lowered in SENSITIVE_FIELDS and value is not None:
            event_dict[key] = "***REDACTED***"

        elif lowered in {"email", "user_email"} and isinstance(value, str) and "@" in value:
            domain = value.split("@", 1)[1]
            event_dict[key] = f"***@{domain}"

    return event_dict


def add_exception_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add exception_type and exception_message for error aggregation."""
    exc_info = event_dict.get("exc_info")
    if exc_info and isinstance(exc_info, tuple) and len(exc_info) == 3:
        exc_type, exc_value, exc_tb = exc_info
        event_dict["exception_type"] = exc_type.__name__ if exc_type else "Unknown"
        event_dict["exception_message"] = str(exc_value) if exc_value else ""

    return event_dict


# ============================================================================
# LOGGER CONFIGURATION
# ============================================================================


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = True,
    colorized: bool = False,
    service_name: str = "customer-api",
    service_version: str = "0.1.0",
    environment: str = "development",
) -> None:
    """
    Configure structured logging.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Use JSON output (True for production, False for development)
        colorized: Colorize console output (only for development)
        service_name: Injected into every event as "service"
        service_version: Injected into every event as "version"
        environment: Injected into every event as "environment"

    JSON output:
        {
          "timestamp": "2025-01-15T10:30:45.123456Z",
          "level": "info",
          "event": "HTTP request completed",
          "service": "customer-api",
          "request_id": "req_abc123",
          "user_email": "***@example.com",
          "status_code": 200,
          "latency_ms": 12.4
        }
    """
    _service_metadata.update(
        service=service_name,
        version=service_version,
        environment=environment,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_request_context,
        add_service_metadata,
        redact_sensitive_fields,
        add_timestamp,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        add_exception_info,
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=colorized),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("Customer updated", customer_id="42")
    """
    return structlog.get_logger(name)


# ============================================================================
# CONTEXT MANAGERS
# ============================================================================


class RequestContext:
    """
    Context manager for request-scoped logging.

    Generates a request_id when none is given and resets every context
    variable on exit, so values never leak between requests.
    """

    def __init__(
        self,
        user_email: str | None = None,
        trace_id: str | None = None,
        request_id: str | None = None,
    ):
        self.request_id = request_id or f"req_{uuid.uuid4().hex[:16]}"
        self.user_email = user_email
        self.trace_id = trace_id or f"trace_{uuid.uuid4().hex[:16]}"

        self._request_id_token = None
        self._user_email_token = None
        self._trace_id_token = None

    def __enter__(self):
        self._request_id_token = request_id_var.set(self.request_id)
        # Always set user_email (even if None) so a later set_user_email()
        # made by the auth dependency is reset on exit.
        self._user_email_token = user_email_var.set(self.user_email)
        self._trace_id_token = trace_id_var.set(self.trace_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._request_id_token is not None:
            request_id_var.reset(self._request_id_token)
        if self._user_email_token is not None:
            user_email_var.reset(self._user_email_token)
        if self._trace_id_token is not None:
            trace_id_var.reset(self._trace_id_token)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def set_user_email(user_email: str) -> None:
    """Set authenticated user email for current context."""
    user_email_var.set(user_email)


def get_request_id() -> str | None:
    """Get request ID from current context."""
    return request_id_var.get()


def get_user_email() -> str | None:
    """Get authenticated user email from current context."""
    return user_email_var.get()


def get_trace_id() -> str | None:
    """Get trace ID from current context."""
    return trace_id_var.get()
