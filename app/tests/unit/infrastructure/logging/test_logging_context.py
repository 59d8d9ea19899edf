"""Unit tests for scoped logging context and formatters."""

import pytest
import structlog

from infrastructure.logging import (
    add_app_info,
    bind_request_context,
    get_correlation_id,
    mask_email_addresses,
    mask_sensitive_data,
    truncate_large_values,
)


@pytest.mark.unit
class TestBindRequestContext:
    def test_binds_and_unbinds_dispatch_context(self):
        with bind_request_context(notification_id="n1", recipient="u1"):
            context = structlog.contextvars.get_contextvars()
            assert context["notification_id"] == "n1"
            assert context["recipient"] == "u1"
            assert get_correlation_id() is not None

        context = structlog.contextvars.get_contextvars()
        assert "notification_id" not in context
        assert get_correlation_id() is None

    def test_explicit_correlation_id(self):
        with bind_request_context(correlation_id="req-1"):
            assert get_correlation_id() == "req-1"


@pytest.mark.unit
class TestFormatters:
    def test_sensitive_values_are_masked(self):
        processor = mask_sensitive_data()

        event = processor(None, "info", {"event": "x", "password": "hunter2", "user_id": "u1"})

        assert event["password"] != "hunter2"
        assert event["user_id"] == "u1"

    def test_long_values_are_truncated(self):
        processor = truncate_large_values(max_length=10)

        event = processor(None, "info", {"event": "x", "body": "a" * 50})

        assert len(event["body"]) < 50

    def test_push_token_values_are_masked(self):
        processor = mask_sensitive_data()

        event = processor(None, "info", {"event": "x", "push_token": "tok-1"})

        assert event["push_token"] == "***REDACTED***"

    def test_none_sensitive_values_are_left_alone(self):
        processor = mask_sensitive_data()

        event = processor(None, "info", {"event": "x", "token": None})

        assert event["token"] is None

    def test_email_addresses_are_shortened(self):
        processor = mask_email_addresses()

        event = processor(None, "info", {"event": "x", "to": "ada@example.com"})

        assert event["to"] == "a***@example.com"

    def test_event_name_is_not_rewritten(self):
        processor = mask_email_addresses()

        event = processor(None, "info", {"event": "sent to ada@example.com"})

        assert event["event"] == "sent to ada@example.com"

    def test_app_info_is_added(self):
        processor = add_app_info("MyPts", "abc123", "production")

        event = processor(None, "info", {"event": "x"})

        assert event["app_name"] == "MyPts"
        assert event["app_version"] == "abc123"
        assert event["environment"] == "production"
