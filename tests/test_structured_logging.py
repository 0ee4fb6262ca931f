"""
Tests for structured logging infrastructure.

Tests:
- Logger configuration (JSON and console)
- Request context propagation and reset
- Redaction of credentials and email addresses
"""

from customer_api.observability.logging import (
    RequestContext,
    add_request_context,
    add_service_metadata,
    configure_logging,
    get_logger,
    get_request_id,
    get_trace_id,
    get_user_email,
    redact_sensitive_fields,
    set_user_email,
)


def test_configure_logging_json_output():
    """Test that JSON logging can be configured."""
    configure_logging(log_level="INFO", json_output=True, colorized=False)

    logger = get_logger("test")
    logger.info("Test message", test_field="value")


def test_configure_logging_console_output():
    """Test that console logging can be configured."""
    configure_logging(log_level="DEBUG", json_output=False, colorized=False)

    logger = get_logger("test")
    logger.info("Test message", test_field="value")


def test_service_metadata_follows_configuration():
    configure_logging(
        json_output=False,
        service_name="customer-api-test",
        service_version="9.9.9",
        environment="staging",
    )

    event = add_service_metadata(None, "info", {"event": "x"})

    assert event["service"] == "customer-api-test"
    assert event["version"] == "9.9.9"
    assert event["environment"] == "staging"


class TestRedaction:
    def test_credentials_redacted(self):
        event = redact_sensitive_fields(
            None,
            "info",
            {
                "event": "login",
                "password": "secret1",
                "password_hash": "$2b$10$abc",
                "Authorization": "Bearer abc",
                "token": "abc.def.ghi",
            },
        )

        assert event["password"] == "***REDACTED***"
        assert event["password_hash"] == "***REDACTED***"
        assert event["Authorization"] == "***REDACTED***"
        assert event["token"] == "***REDACTED***"
        assert event["event"] == "login"

    def test_none_values_left_alone(self):
        event = redact_sensitive_fields(None, "info", {"password": None})

        assert event["password"] is None

    def test_email_reduced_to_domain(self):
        event = redact_sensitive_fields(
            None, "info", {"email": "ann@x.com", "user_email": "bob@globex.example"}
        )

        assert event["email"] == "***@x.com"
        assert event["user_email"] == "***@globex.example"

    def test_non_email_value_untouched(self):
        event = redact_sensitive_fields(None, "info", {"email": "not-an-address"})

        assert event["email"] == "not-an-address"


class TestRequestContext:
    def test_context_sets_and_resets(self):
        assert get_request_id() is None

        with RequestContext(request_id="req_1", trace_id="trace_1"):
            assert get_request_id() == "req_1"
            assert get_trace_id() == "trace_1"

            event = add_request_context(None, "info", {})
            assert event["request_id"] == "req_1"
            assert event["trace_id"] == "trace_1"

        assert get_request_id() is None
        assert get_trace_id() is None

    def test_generates_ids_when_absent(self):
        with RequestContext() as ctx:
            assert ctx.request_id.startswith("req_")
            assert ctx.trace_id.startswith("trace_")

    def test_user_email_set_inside_context_does_not_leak(self):
        with RequestContext(request_id="req_2"):
            set_user_email("ann@x.com")
            assert get_user_email() == "ann@x.com"
            assert add_request_context(None, "info", {})["user_email"] == "ann@x.com"

        assert get_user_email() is None
