"""Notification dispatcher with per-channel failure isolation.

Processes each persisted notification at most once per process:
- Skips archived notifications and duplicates (notification id, and
  (transaction id, type) for Transaction-linked notifications)
- Loads the recipient's live preferences
- Publishes an in-app refresh hint to the real-time sink
- Invokes push, email and chat in order, each gated by the channel switch
  and the shared category preference check, each isolated from the others

Usage Example:
    from infrastructure.notifications import NotificationDispatcher

    dispatcher = NotificationDispatcher(
        channels=[push_channel, email_channel, chat_channel],
        users=user_repository,
        dedup_guard=DeduplicationGuard(InMemoryCache()),
        realtime=connection_manager,
    )

    results = dispatcher.dispatch(notification)
    sent = [r.channel for r in results if r.is_success]
"""

from typing import TYPE_CHECKING, List, Optional, Sequence

from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.channels.realtime import (
    NEW_NOTIFICATION_EVENT,
    RealtimeSink,
)
from infrastructure.notifications.dedup import DeduplicationGuard
from infrastructure.notifications.models import (
    Notification,
    NotificationResult,
    NotificationStatus,
)
from infrastructure.notifications.preferences import Recipient, is_category_allowed

if TYPE_CHECKING:
    from infrastructure.persistence.users import UserRepository

logger = get_module_logger()


class NotificationDispatcher:
    """Multi-channel notification dispatcher.

    Attributes:
        channels: Channels in invocation order (push, email, chat)
        users: User store used to load the recipient's preferences
        dedup_guard: Process-local at-most-once guard
        realtime: Optional live sink, published to before any channel

    Delivery is best-effort: nothing is retried and no channel outcome is
    written back to the notification record.
    """

    def __init__(
        self,
        channels: Sequence[NotificationChannel],
        users: "UserRepository",
        dedup_guard: DeduplicationGuard,
        realtime: Optional[RealtimeSink] = None,
    ):
        self.channels = list(channels)
        self.users = users
        self.dedup_guard = dedup_guard
        self.realtime = realtime

        logger.info(
            "initialized_notification_dispatcher",
            channels=[channel.channel_name for channel in self.channels],
            realtime_enabled=realtime is not None,
        )

    def dispatch(self, notification: Notification) -> List[NotificationResult]:
        """Deliver one notification through every eligible channel.

        Process:
        1. Skip archived notifications
        2. Claim the notification id (skip if already claimed)
        3. For Transaction-linked notifications, claim (related id, type)
        4. Load the recipient; a missing user is a logged skip
        5. Publish to the real-time sink (errors logged and ignored)
        6. Run each channel in isolation

        Args:
            notification: Persisted notification (must carry its id)

        Returns:
            One NotificationResult per configured channel, or an empty list
            when the notification was skipped before channel selection.
        """
        with bind_request_context(
            notification_id=notification.id,
            recipient=notification.recipient,
            notification_type=notification.type,
        ):
            if notification.is_archived:
                logger.info("dispatch_skipped_archived")
                return []

            if not self._claim(notification):
                return []

            recipient = self.users.find_recipient(notification.recipient)
            if recipient is None:
                logger.warning("dispatch_recipient_not_found")
                return []

            self._publish_realtime(notification)

            results = [
                self._run_channel(channel, notification, recipient)
                for channel in self.channels
            ]

            logger.info(
                "notification_dispatched",
                sent=[r.channel for r in results if r.is_success],
                failed=[
                    r.channel for r in results if r.status == NotificationStatus.FAILED
                ],
            )
            return results

    def _claim(self, notification: Notification) -> bool:
        if not notification.id:
            # Not persisted yet, nothing stable to deduplicate on.
            logger.warning("dispatch_skipped_missing_id")
            return False

        if not self.dedup_guard.claim_notification(notification.id):
            logger.info("dispatch_skipped_duplicate")
            return False

        if notification.is_transaction_linked:
            related_id = notification.related_to.id
            if not self.dedup_guard.claim_transaction(related_id, notification.type):
                logger.info(
                    "dispatch_skipped_duplicate_transaction",
                    related_id=related_id,
                )
                return False

        return True

    def _publish_realtime(self, notification: Notification) -> None:
        if self.realtime is None:
            return
        try:
            self.realtime.publish(
                notification.recipient,
                NEW_NOTIFICATION_EVENT,
                notification.to_payload(),
            )
        except Exception as e:
            logger.warning("realtime_publish_failed", error=str(e))

    def _run_channel(
        self,
        channel: NotificationChannel,
        notification: Notification,
        recipient: Recipient,
    ) -> NotificationResult:
        name = channel.channel_name
        try:
            if not channel.is_enabled(recipient):
                logger.debug("channel_disabled_by_user", channel=name)
                return channel.skipped(notification, "Channel disabled by user")

            if not is_category_allowed(
                notification, channel.category_preferences(recipient)
            ):
                logger.info("channel_category_disabled", channel=name)
                return channel.skipped(notification, "Category disabled by user")

            return channel.send(notification, recipient)
        except Exception as e:
            logger.error(
                "channel_send_failed",
                channel=name,
                related_model=(
                    notification.related_to.model if notification.related_to else None
                ),
                related_id=(
                    notification.related_to.id if notification.related_to else None
                ),
                error=str(e),
                exc_info=True,
            )
            return NotificationResult(
                notification_id=notification.id,
                channel=name,
                status=NotificationStatus.FAILED,
                message=f"Channel exception: {str(e)}",
                error_code="CHANNEL_EXCEPTION",
            )
