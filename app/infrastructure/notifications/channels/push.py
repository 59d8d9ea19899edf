"""Push channel: multicast to every registered device, then prune."""

from typing import TYPE_CHECKING

from infrastructure.logging import get_module_logger
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Notification, NotificationResult
from infrastructure.notifications.preferences import Recipient
from infrastructure.notifications.strategies import build_push_data

if TYPE_CHECKING:
    from infrastructure.persistence.users import UserRepository
    from integrations.firebase.client import PushSender

logger = get_module_logger()


class PushChannel(NotificationChannel):
    """Push notifications through a multicast sender.

    Targets the recipient's device push tokens. Tokens the sender reports as
    invalid are removed from the user's devices right after the send.
    """

    def __init__(self, sender: "PushSender", users: "UserRepository"):
        self._sender = sender
        self._users = users

    @property
    def channel_name(self) -> str:
        return "push"

    def is_enabled(self, recipient: Recipient) -> bool:
        return recipient.notifications.push

    def send(
        self, notification: Notification, recipient: Recipient
    ) -> NotificationResult:
        tokens = recipient.push_tokens
        if not tokens:
            logger.info("push_skipped_no_devices", recipient=recipient.id)
            return self.skipped(notification, "No registered push targets")

        report = self._sender.send_multicast(
            tokens,
            notification.title,
            notification.message,
            build_push_data(notification),
        )

        if report.invalid_targets:
            removed = self._users.remove_push_tokens(
                recipient.id, report.invalid_targets
            )
            logger.info(
                "push_targets_pruned",
                recipient=recipient.id,
                invalid_count=len(report.invalid_targets),
                modified=removed,
            )

        logger.info(
            "push_delivered",
            recipient=recipient.id,
            success_count=report.success_count,
            failure_count=report.failure_count,
        )
        if report.success_count == 0:
            return self.failed(
                notification,
                f"Push failed for all {report.failure_count} targets",
                error_code="PUSH_ALL_FAILED",
            )
        return self.sent(notification, f"Delivered to {report.success_count} devices")
