"""Unit tests for email, push and chat payload strategies."""

from datetime import datetime

import pytest

from infrastructure.notifications.strategies import (
    BookingRequestEmail,
    ConnectionRequestEmail,
    DefaultEmail,
    build_push_data,
    build_transaction_fields,
    fallback_email_html,
    format_datetime,
    resolve_location,
    select_email_content,
    select_email_strategy,
    transaction_detail_url,
)

APP = "MyPts"
BASE_URL = "https://app.example.com"


def content_for(notification, recipient):
    return select_email_content(notification, recipient, APP, BASE_URL)


@pytest.mark.unit
class TestEmailStrategySelection:
    def test_connection_request_type_selects_connection_template(
        self, notification_factory, recipient_factory
    ):
        notification = notification_factory(
            type="connection_request", title="Ada wants to connect"
        )

        content = content_for(notification, recipient_factory())

        assert content.template == "connection-request"
        assert content.subject == "New Connection Request - Ada wants to connect"

    def test_connection_markers_select_connection_template(self, notification_factory):
        notification = notification_factory(metadata={"connectionReason": "networking"})

        assert isinstance(select_email_strategy(notification), ConnectionRequestEmail)

    def test_booking_request(self, notification_factory, recipient_factory):
        notification = notification_factory(
            type="booking_request",
            title="Haircut",
            action={"text": "Review", "url": "/bookings/1"},
            metadata={
                "metadata": {
                    "service": {"name": "Haircut", "duration": 30},
                    "startTime": "2026-01-05T15:00:00Z",
                    "location": {"name": "Studio", "address": "1 Main St"},
                    "requester": {"name": "Grace"},
                }
            },
        )

        content = content_for(notification, recipient_factory())

        assert isinstance(select_email_strategy(notification), BookingRequestEmail)
        assert content.template == "event-notification"
        assert content.subject == "New Booking Request - Haircut"
        event = content.data["event"]
        assert event["name"] == "Haircut"
        assert event["location"] == "Studio, 1 Main St"
        assert event["organizer"] == "Grace"
        assert event["duration"] == 30
        assert event["status"] == "pending"
        assert content.data["greeting"] == "Hello Ada Lovelace,"
        assert content.data["actions"][0] == {
            "text": "Review",
            "url": "/bookings/1",
            "secondary": False,
        }
        assert content.data["metadata"]["eventType"] == "booking"

    @pytest.mark.parametrize(
        "event_type,expected",
        [("booking", "Booking Notification - Call"), ("meeting", "Event Notification - Call")],
    )
    def test_event_markers(self, notification_factory, recipient_factory, event_type, expected):
        notification = notification_factory(
            title="Call", metadata={"eventType": event_type, "eventName": "Call"}
        )

        content = content_for(notification, recipient_factory())

        assert content.template == "event-notification"
        assert content.subject == expected

    @pytest.mark.parametrize(
        "model,metadata,template,subject",
        [
            ("Task", {}, "task-reminder", "Task Reminder: Ship it"),
            ("Event", {}, "event-notification", "Event Reminder: Ship it"),
            ("Booking", {}, "event-notification", "Booking Reminder: Ship it"),
            ("Profile", {}, "general-reminder", "Reminder: Ship it"),
        ],
    )
    def test_reminders(
        self, notification_factory, recipient_factory, model, metadata, template, subject
    ):
        notification = notification_factory(
            type="reminder",
            title="Reminder",
            related_to={"model": model, "id": "r1"},
            metadata={"itemTitle": "Ship it", **metadata},
        )

        content = content_for(notification, recipient_factory())

        assert (content.template, content.subject) == (template, subject)

    def test_purchase_confirmation(self, transaction_notification_factory, recipient_factory):
        content = content_for(transaction_notification_factory("BUY_MYPTS"), recipient_factory())

        assert content.template == "purchase-confirmation-email"
        assert content.subject == "Purchase Confirmation - MyPts"
        assert content.data["transactionId"] == "65f0c1d2e3a4b5c6d7e8fb01"
        assert "timestamp" in content.data["metadata"]

    def test_sale_confirmation(self, transaction_notification_factory, recipient_factory):
        content = content_for(transaction_notification_factory("SELL_MYPTS"), recipient_factory())

        assert content.template == "sale-confirmation-email"
        assert content.subject == "Sale Confirmation - MyPts"

    def test_other_transaction(self, transaction_notification_factory, recipient_factory):
        content = content_for(
            transaction_notification_factory("TRANSFER", title="Transfer done"),
            recipient_factory(),
        )

        assert content.template == "transaction-notification"
        assert content.subject == "Transfer done"

    def test_security_alert(self, notification_factory, recipient_factory):
        content = content_for(
            notification_factory(type="security_alert", title="New login"),
            recipient_factory(),
        )

        assert content.template == "security-alert-email"
        assert content.subject == "New login"
        assert "timestamp" in content.data["metadata"]

    def test_default(self, notification_factory, recipient_factory):
        notification = notification_factory(type="badge_earned", title="Badge")

        content = content_for(notification, recipient_factory())

        assert isinstance(select_email_strategy(notification), DefaultEmail)
        assert content.template == "notification-email"
        assert content.subject == "Badge"

    def test_base_data(self, notification_factory, recipient_factory):
        notification = notification_factory(action={"text": "Open", "url": "/x"})

        data = content_for(notification, recipient_factory()).data

        assert data["appName"] == APP
        assert data["baseUrl"] == BASE_URL
        assert data["unsubscribeToken"] == "unsub-123"
        assert data["recipientName"] == "Ada Lovelace"
        assert data["actionUrl"] == "/x"
        assert callable(data["formatDateTime"])


@pytest.mark.unit
class TestHelpers:
    def test_format_datetime(self):
        assert (
            format_datetime(datetime(2026, 1, 5, 15, 0))
            == "Monday, January 05, 2026, 03:00 PM"
        )
        assert format_datetime("2026-01-05T15:00:00Z") == "Monday, January 05, 2026, 03:00 PM"
        assert format_datetime("soon") == "soon"
        assert format_datetime(None) == ""

    def test_resolve_location(self):
        assert resolve_location("Room 1") == "Room 1"
        assert resolve_location({"name": "Studio"}) == "Studio"
        assert resolve_location({}) is None
        assert resolve_location(None) is None

    def test_fallback_html_contains_message_and_link(self, notification_factory):
        html = fallback_email_html(
            notification_factory(message="Hi", action={"text": "Open", "url": "/x"})
        )

        assert "<p>Hi</p>" in html
        assert '<a href="/x">Open</a>' in html

    def test_fallback_html_escapes_content(self, notification_factory):
        html = fallback_email_html(
            notification_factory(
                message="<script>alert(1)</script>",
                action={"text": "<b>Open</b>", "url": '/x?a=1&b="2"'},
            )
        )

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&lt;b&gt;Open&lt;/b&gt;" in html
        assert 'href="/x?a=1&amp;b=&quot;2&quot;"' in html

    def test_booking_with_string_service_and_requester(
        self, notification_factory, recipient_factory
    ):
        notification = notification_factory(
            type="booking_request",
            title="Haircut",
            metadata={"service": "Haircut", "requester": "Bob", "metadata": "n/a"},
        )

        content = select_email_content(
            notification, recipient_factory(), app_name="MyPts", base_url=""
        )

        assert content.data["event"]["name"] == "Service Booking"
        assert content.data["event"]["organizer"] is None
        assert content.data["event"]["duration"] is None


@pytest.mark.unit
class TestPushAndChatPayloads:
    def test_transaction_push_data(self, transaction_notification_factory):
        data = build_push_data(transaction_notification_factory("BUY_MYPTS"))

        assert data == {
            "notificationType": "system_notification",
            "notificationId": "65f0c1d2e3a4b5c6d7e8fa01",
            "relatedModel": "Transaction",
            "relatedId": "65f0c1d2e3a4b5c6d7e8fb01",
            "transactionType": "BUY_MYPTS",
            "amount": "100",
            "status": "COMPLETED",
        }

    def test_generic_push_data(self, notification_factory):
        data = build_push_data(
            notification_factory(action={"text": "Open", "url": "/profiles/1"})
        )

        assert data["clickAction"] == "OPEN_URL"
        assert data["url"] == "/profiles/1"
        assert all(isinstance(value, str) for value in data.values())

    def test_generic_push_data_without_action(self, notification_factory):
        data = build_push_data(notification_factory())

        assert data["clickAction"] == "OPEN_APP"
        assert "relatedModel" not in data

    def test_transaction_detail_url_defaults_to_dashboard(
        self, transaction_notification_factory
    ):
        url = transaction_detail_url(
            transaction_notification_factory(), "dashboard.example.com/"
        )

        assert url == (
            "https://dashboard.example.com/dashboard/transactions/65f0c1d2e3a4b5c6d7e8fb01"
        )

    def test_transaction_detail_url_prefers_action(self, transaction_notification_factory):
        notification = transaction_notification_factory(
            action={"text": "View", "url": "https://x.example.com/t/1"}
        )

        assert transaction_detail_url(notification, "https://c") == "https://x.example.com/t/1"

    def test_transaction_fields(self, transaction_notification_factory):
        fields = build_transaction_fields(transaction_notification_factory("BUY_MYPTS"))

        assert fields == {
            "id": "65f0c1d2e3a4b5c6d7e8fb01",
            "type": "BUY_MYPTS",
            "amount": 100,
            "balance": 250,
            "status": "COMPLETED",
        }
