"""Notification channel abstract base class.

All channel implementations (push, email, chat) implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from infrastructure.notifications.models import (
    Notification,
    NotificationResult,
    NotificationStatus,
)
from infrastructure.notifications.preferences import CategoryPreferences, Recipient


class NotificationChannel(ABC):
    """Abstract base class for delivery channels.

    The dispatcher asks each channel whether the recipient switched it on
    (``is_enabled``) and which category preferences govern it
    (``category_preferences``), then calls ``send``. Channels own their
    payload building and provider calls.

    Example Implementation:
        class PushChannel(NotificationChannel):

            @property
            def channel_name(self) -> str:
                return "push"

            def is_enabled(self, recipient: Recipient) -> bool:
                return recipient.notifications.push

            def send(self, notification, recipient) -> NotificationResult:
                report = self._sender.send_multicast(...)
                return self.sent(notification, f"Delivered to {report.success_count}")
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Channel identifier (push, email, chat).

        Returns:
            Channel name string for routing and logging
        """
        pass

    @abstractmethod
    def is_enabled(self, recipient: Recipient) -> bool:
        """Whether the recipient switched this channel on."""
        pass

    def category_preferences(
        self, recipient: Recipient
    ) -> Optional[CategoryPreferences]:
        """Category preferences that gate this channel (None allows all)."""
        return recipient.notifications.preferences

    @abstractmethod
    def send(
        self, notification: Notification, recipient: Recipient
    ) -> NotificationResult:
        """Deliver one notification to one recipient.

        May raise on provider failure; the dispatcher isolates every channel
        call and records the exception as a FAILED result.

        Args:
            notification: Notification to deliver
            recipient: Recipient with preference and address fields

        Returns:
            NotificationResult with SENT, SKIPPED or FAILED status
        """
        pass

    def sent(self, notification: Notification, message: str) -> NotificationResult:
        return self._result(notification, NotificationStatus.SENT, message)

    def skipped(self, notification: Notification, message: str) -> NotificationResult:
        return self._result(notification, NotificationStatus.SKIPPED, message)

    def failed(
        self,
        notification: Notification,
        message: str,
        error_code: Optional[str] = None,
    ) -> NotificationResult:
        return self._result(
            notification, NotificationStatus.FAILED, message, error_code=error_code
        )

    def _result(
        self,
        notification: Notification,
        status: NotificationStatus,
        message: str,
        error_code: Optional[str] = None,
    ) -> NotificationResult:
        return NotificationResult(
            notification_id=notification.id,
            channel=self.channel_name,
            status=status,
            message=message,
            error_code=error_code,
        )
