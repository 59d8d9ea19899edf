"""Per-channel payload strategies.

Email content is chosen from an ordered table of strategy objects; the
first strategy whose ``matches`` returns True builds the template name,
subject and template data. Push data and chat payloads are built by plain
functions since they only distinguish transaction notifications from the
rest.

Usage:
    content = select_email_content(notification, recipient, app_name="MyPts",
                                   base_url="https://app.example.com")
    html = render(content.template)(content.data)
"""

import html
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from infrastructure.notifications.models import (
    Notification,
    NotificationMetadata,
    NotificationType,
    RelatedModel,
)
from infrastructure.notifications.preferences import (
    PURCHASE_TRANSACTION,
    SALE_TRANSACTION,
    Recipient,
)

DEFAULT_TEMPLATE = "notification-email"
DATETIME_DISPLAY_FORMAT = "%A, %B %d, %Y, %I:%M %p"

CONNECTION_MARKERS = ("connectionType", "connectionReason", "source")
EVENT_MARKERS = ("eventType", "eventName", "eventDate", "bookingId")


@dataclass
class EmailContent:
    """Template name, subject and data for one email."""

    template: str
    subject: str
    data: Dict[str, Any] = field(default_factory=dict)


def format_datetime(value: Any) -> str:
    """Render a date for humans, e.g. ``Monday, January 05, 2026, 03:00 PM``.

    Accepts datetimes and ISO-8601 strings; unparseable strings are returned
    unchanged and empty values render as "".
    """
    if not value:
        return ""
    if isinstance(value, datetime):
        moment = value
    else:
        try:
            moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return str(value)
    return moment.strftime(DATETIME_DISPLAY_FORMAT)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def base_template_data(
    notification: Notification,
    recipient: Recipient,
    app_name: str,
    base_url: str,
) -> Dict[str, Any]:
    """Fields every email template can rely on."""
    action = notification.action
    return {
        "title": notification.title,
        "message": notification.message,
        "actionUrl": action.url if action else "",
        "actionText": action.text if action else "",
        "action": action.model_dump() if action else {},
        "metadata": notification.metadata.to_dict(),
        "appName": app_name,
        "year": datetime.now(timezone.utc).year,
        "baseUrl": base_url,
        "unsubscribeToken": recipient.unsubscribe_token or "",
        "recipientName": recipient.display_name,
        "formatDateTime": format_datetime,
    }


def _item_title(notification: Notification) -> str:
    return notification.metadata.get("itemTitle") or notification.title


def _is_booking_event_type(metadata: NotificationMetadata) -> bool:
    event_type = metadata.get("eventType")
    return isinstance(event_type, str) and event_type.lower() == "booking"


def _as_mapping(value: Any) -> Dict[str, Any]:
    """``value`` when it is a dict; strings and other shapes read as empty."""
    return value if isinstance(value, dict) else {}


def resolve_location(location: Any) -> Optional[str]:
    """Location as a display string from a plain string or ``{name, address}``."""
    if not location:
        return None
    if isinstance(location, str):
        return location
    if isinstance(location, dict):
        parts = [location.get("name"), location.get("address")]
        joined = ", ".join(str(part) for part in parts if part)
        return joined or None
    return None


class EmailStrategy(ABC):
    """One row of the email strategy table."""

    name: str = ""

    @abstractmethod
    def matches(self, notification: Notification) -> bool:
        pass

    @abstractmethod
    def build(
        self, notification: Notification, data: Dict[str, Any], app_name: str
    ) -> EmailContent:
        pass


class ConnectionRequestEmail(EmailStrategy):
    name = "connection_request"

    def matches(self, notification):
        if notification.type in (
            NotificationType.CONNECTION_REQUEST.value,
            NotificationType.PROFILE_CONNECTION_REQUEST.value,
        ):
            return True
        return notification.metadata.has_any(*CONNECTION_MARKERS)

    def build(self, notification, data, app_name):
        return EmailContent(
            template="connection-request",
            subject=f"New Connection Request - {notification.title}",
            data=data,
        )


class BookingRequestEmail(EmailStrategy):
    name = "booking_request"

    def matches(self, notification):
        return notification.type == NotificationType.BOOKING_REQUEST.value

    def build(self, notification, data, app_name):
        # Booking payloads are sometimes wrapped in a nested ``metadata`` key.
        nested = notification.metadata.get("metadata")
        booking = (
            NotificationMetadata.of(nested)
            if nested and isinstance(nested, dict)
            else notification.metadata
        )
        service = _as_mapping(booking.get("service"))
        requester = _as_mapping(booking.get("requester"))
        action = notification.action

        data["event"] = {
            "name": service.get("name") or booking.get("itemTitle") or "Service Booking",
            "type": "BOOKING",
            "icon": "📋",
            "startTime": format_datetime(booking.get("startTime")) or None,
            "endTime": format_datetime(booking.get("endTime")) or None,
            "location": resolve_location(booking.get("location")),
            "organizer": requester.get("name"),
            "participants": None,
            "duration": service.get("duration") or booking.get("duration"),
            "description": booking.get("description"),
            "status": booking.get("status", "pending"),
        }
        data["greeting"] = f"Hello {data['recipientName']},"
        data["description"] = (
            "You have received a new booking request. Here are the details:"
        )
        data["actions"] = [
            {
                "text": (action.text if action and action.text else "View Booking"),
                "url": (action.url if action and action.url else "#"),
                "secondary": False,
            }
        ]
        data["metadata"] = {
            **booking.to_dict(),
            "eventType": "booking",
            "notificationType": "request",
        }
        return EmailContent(
            template="event-notification",
            subject=f"New Booking Request - {notification.title}",
            data=data,
        )


class EventEmail(EmailStrategy):
    name = "event"

    def matches(self, notification):
        return notification.metadata.has_any(*EVENT_MARKERS)

    def build(self, notification, data, app_name):
        if _is_booking_event_type(notification.metadata):
            subject = f"Booking Notification - {notification.title}"
        else:
            subject = f"Event Notification - {notification.title}"
        return EmailContent(template="event-notification", subject=subject, data=data)


class ReminderEmail(EmailStrategy):
    name = "reminder"

    def matches(self, notification):
        return notification.type == NotificationType.REMINDER.value

    def build(self, notification, data, app_name):
        related = notification.related_to.model if notification.related_to else None
        title = _item_title(notification)

        if related == RelatedModel.TASK.value:
            return EmailContent("task-reminder", f"Task Reminder: {title}", data)
        if related == RelatedModel.EVENT.value:
            if _is_booking_event_type(notification.metadata):
                return EmailContent(
                    "event-notification", f"Booking Reminder: {title}", data
                )
            return EmailContent("event-notification", f"Event Reminder: {title}", data)
        if related == RelatedModel.BOOKING.value:
            return EmailContent("event-notification", f"Booking Reminder: {title}", data)
        return EmailContent("general-reminder", f"Reminder: {title}", data)


class TransactionEmail(EmailStrategy):
    name = "transaction"

    def matches(self, notification):
        return notification.is_transaction_notification

    def build(self, notification, data, app_name):
        metadata = notification.metadata.to_dict()
        metadata.setdefault("timestamp", utc_now_iso())
        data["transactionId"] = notification.related_to.id
        data["metadata"] = metadata

        transaction_type = metadata.get("transactionType")
        if transaction_type == PURCHASE_TRANSACTION:
            return EmailContent(
                "purchase-confirmation-email", f"Purchase Confirmation - {app_name}", data
            )
        if transaction_type == SALE_TRANSACTION:
            return EmailContent(
                "sale-confirmation-email", f"Sale Confirmation - {app_name}", data
            )
        return EmailContent("transaction-notification", notification.title, data)


class SecurityAlertEmail(EmailStrategy):
    name = "security_alert"

    def matches(self, notification):
        return notification.type == NotificationType.SECURITY_ALERT.value

    def build(self, notification, data, app_name):
        metadata = notification.metadata.to_dict()
        metadata.setdefault("timestamp", utc_now_iso())
        data["metadata"] = metadata
        return EmailContent("security-alert-email", notification.title, data)


class DefaultEmail(EmailStrategy):
    name = "default"

    def matches(self, notification):
        return True

    def build(self, notification, data, app_name):
        return EmailContent(DEFAULT_TEMPLATE, notification.title, data)


EMAIL_STRATEGIES: Sequence[EmailStrategy] = (
    ConnectionRequestEmail(),
    BookingRequestEmail(),
    EventEmail(),
    ReminderEmail(),
    TransactionEmail(),
    SecurityAlertEmail(),
    DefaultEmail(),
)


def select_email_strategy(
    notification: Notification,
    strategies: Sequence[EmailStrategy] = EMAIL_STRATEGIES,
) -> EmailStrategy:
    for strategy in strategies:
        if strategy.matches(notification):
            return strategy
    return DefaultEmail()


def select_email_content(
    notification: Notification,
    recipient: Recipient,
    app_name: str,
    base_url: str,
    strategies: Sequence[EmailStrategy] = EMAIL_STRATEGIES,
) -> EmailContent:
    """Pick the first matching strategy and build the email content."""
    strategy = select_email_strategy(notification, strategies)
    data = base_template_data(notification, recipient, app_name, base_url)
    return strategy.build(notification, data, app_name)


def fallback_email_html(notification: Notification) -> str:
    """Minimal HTML used when a template cannot be rendered."""
    body = f"<p>{html.escape(notification.message)}</p>"
    if notification.action:
        url = html.escape(notification.action.url or "", quote=True)
        text = html.escape(notification.action.text or "")
        body += f'<p><a href="{url}">{text}</a></p>'
    return body


def build_push_data(notification: Notification) -> Dict[str, str]:
    """Data map sent alongside a push message. All values are strings."""
    if notification.is_transaction_notification:
        metadata = notification.metadata
        return {
            "notificationType": notification.type,
            "notificationId": notification.id or "",
            "relatedModel": notification.related_to.model,
            "relatedId": notification.related_to.id,
            "transactionType": str(metadata.get("transactionType", "Transaction")),
            "amount": str(metadata.get("amount", 0)),
            "status": str(metadata.get("status", "Unknown")),
        }

    url = notification.action.url if notification.action else ""
    data = {
        "notificationType": notification.type,
        "notificationId": notification.id or "",
        "clickAction": "OPEN_URL" if url else "OPEN_APP",
        "url": url,
        "timestamp": str(int(datetime.now(timezone.utc).timestamp() * 1000)),
    }
    if notification.related_to:
        data["relatedModel"] = notification.related_to.model
        data["relatedId"] = notification.related_to.id
    return data


def _with_scheme(url: str) -> str:
    return url if url.startswith("http") else f"https://{url}"


def transaction_detail_url(notification: Notification, client_url: str) -> str:
    """Link to the transaction: the action URL if any, else the dashboard page."""
    if notification.action and notification.action.url:
        return _with_scheme(notification.action.url)
    base = _with_scheme(client_url.rstrip("/"))
    return f"{base}/dashboard/transactions/{notification.related_to.id}"


def build_transaction_fields(notification: Notification) -> Dict[str, Any]:
    """Structured transaction summary for the chat bot."""
    metadata = notification.metadata
    return {
        "id": notification.related_to.id,
        "type": metadata.get("transactionType", "Transaction"),
        "amount": metadata.get("amount", 0),
        "balance": metadata.get("balance", 0),
        "status": metadata.get("status", "Unknown"),
    }


__all__ = [
    "EMAIL_STRATEGIES",
    "EmailContent",
    "EmailStrategy",
    "base_template_data",
    "build_push_data",
    "build_transaction_fields",
    "fallback_email_html",
    "format_datetime",
    "resolve_location",
    "select_email_content",
    "select_email_strategy",
    "transaction_detail_url",
]
