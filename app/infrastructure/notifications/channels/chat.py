"""Chat channel implementation using a chat bot notifier."""

from typing import TYPE_CHECKING, Optional

from infrastructure.logging import get_module_logger
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Notification, NotificationResult
from infrastructure.notifications.preferences import CategoryPreferences, Recipient
from infrastructure.notifications.strategies import (
    build_transaction_fields,
    transaction_detail_url,
)

if TYPE_CHECKING:
    from integrations.telegram.client import ChatNotifier

logger = get_module_logger()


class ChatChannel(NotificationChannel):
    """Chat bot notification channel.

    Addresses the recipient by their stable chat id when known, otherwise by
    handle. Transaction notifications get the structured transaction form;
    everything else the generic title/message/action form.
    """

    def __init__(self, notifier: "ChatNotifier", client_url: str):
        self._notifier = notifier
        self._client_url = client_url

    @property
    def channel_name(self) -> str:
        return "chat"

    def is_enabled(self, recipient: Recipient) -> bool:
        return recipient.telegram.enabled

    def category_preferences(
        self, recipient: Recipient
    ) -> Optional[CategoryPreferences]:
        return recipient.telegram.preferences

    def send(
        self, notification: Notification, recipient: Recipient
    ) -> NotificationResult:
        target = recipient.telegram.chat_target
        if not target:
            logger.info("chat_skipped_no_target", recipient=recipient.id)
            return self.skipped(notification, "No chat id or handle")

        if notification.is_transaction_notification:
            detail_url = transaction_detail_url(notification, self._client_url)
            delivered = self._notifier.send_transaction_notification(
                target,
                notification.title,
                notification.message,
                build_transaction_fields(notification),
                detail_url,
            )
        else:
            action = notification.action
            delivered = self._notifier.send_notification(
                target,
                notification.title,
                notification.message,
                action_url=action.url if action and action.url else None,
                action_text=action.text if action and action.text else None,
            )

        logger.info(
            "chat_delivery_result",
            recipient=recipient.id,
            delivered=delivered,
            via_id=bool(recipient.telegram.telegram_id),
        )
        if not delivered:
            return self.failed(
                notification, "Chat notifier reported failure", error_code="CHAT_FAILED"
            )
        return self.sent(notification, "Delivered to chat")
