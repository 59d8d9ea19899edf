"""Unit tests for EmailChannel."""

from unittest.mock import MagicMock

import pytest

from infrastructure.notifications import EmailChannel, NotificationStatus


@pytest.fixture
def email_sender():
    return MagicMock()


@pytest.fixture
def templates():
    loader = MagicMock()
    loader.load_template.return_value = lambda data: f"<h1>{data['title']}</h1>"
    return loader


@pytest.fixture
def channel(email_sender, templates):
    return EmailChannel(
        email_sender, templates, app_name="MyPts", base_url="https://app.example.com"
    )


@pytest.mark.unit
class TestEmailChannel:
    def test_is_enabled_follows_email_switch(self, channel, recipient_factory):
        assert channel.is_enabled(recipient_factory(email_enabled=True)) is True
        assert channel.is_enabled(recipient_factory(email_enabled=False)) is False

    def test_sends_rendered_template(
        self, channel, email_sender, templates, notification_factory, recipient_factory
    ):
        result = channel.send(
            notification_factory(type="connection_request", title="Connect"),
            recipient_factory(),
        )

        assert result.status == NotificationStatus.SENT
        templates.load_template.assert_called_once_with("connection-request")
        email_sender.send.assert_called_once_with(
            "ada@example.com", "New Connection Request - Connect", "<h1>Connect</h1>"
        )

    def test_missing_address_is_skipped(
        self, channel, email_sender, notification_factory, recipient_factory
    ):
        result = channel.send(notification_factory(), recipient_factory(email=None))

        assert result.status == NotificationStatus.SKIPPED
        email_sender.send.assert_not_called()

    def test_render_failure_sends_fallback(
        self, channel, email_sender, templates, notification_factory, recipient_factory
    ):
        templates.load_template.side_effect = FileNotFoundError("missing template")

        result = channel.send(
            notification_factory(message="Body", action={"text": "Open", "url": "/x"}),
            recipient_factory(),
        )

        assert result.status == NotificationStatus.SENT
        email_sender.send.assert_called_once()
        to, subject, html = email_sender.send.call_args.args
        assert to == "ada@example.com"
        assert subject == "Profile Viewed"
        assert "<p>Body</p>" in html
        assert '<a href="/x">Open</a>' in html

    def test_send_failure_retries_with_fallback(
        self, channel, email_sender, notification_factory, recipient_factory
    ):
        email_sender.send.side_effect = [ConnectionError("smtp down"), None]

        result = channel.send(notification_factory(), recipient_factory())

        assert result.status == NotificationStatus.SENT
        assert email_sender.send.call_count == 2

    def test_fallback_failure_is_reported_not_raised(
        self, channel, email_sender, notification_factory, recipient_factory
    ):
        email_sender.send.side_effect = ConnectionError("smtp down")

        result = channel.send(notification_factory(), recipient_factory())

        assert result.status == NotificationStatus.FAILED
        assert result.error_code == "EMAIL_FAILED"

    def test_content_failure_sends_fallback_with_title(
        self, channel, email_sender, notification_factory, recipient_factory, monkeypatch
    ):
        monkeypatch.setattr(
            "infrastructure.notifications.channels.email.select_email_content",
            MagicMock(side_effect=AttributeError("'str' object has no attribute 'get'")),
        )

        result = channel.send(
            notification_factory(type="booking_request", title="Haircut"),
            recipient_factory(),
        )

        assert result.status == NotificationStatus.SENT
        email_sender.send.assert_called_once()
        assert email_sender.send.call_args.args[1] == "Haircut"

    def test_booking_with_plain_string_fields_is_sent(
        self, channel, email_sender, templates, notification_factory, recipient_factory
    ):
        result = channel.send(
            notification_factory(
                type="booking_request",
                title="Haircut",
                metadata={"service": "Haircut", "requester": "Bob"},
            ),
            recipient_factory(),
        )

        assert result.status == NotificationStatus.SENT
        templates.load_template.assert_called_once_with("event-notification")
        assert email_sender.send.call_args.args[1] == "New Booking Request - Haircut"
