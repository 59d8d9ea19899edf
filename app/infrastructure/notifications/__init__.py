"""Notification fan-out pipeline.

Delivers each persisted notification at most once per process to a live
in-app sink and to push, email and chat channels, gated by the recipient's
preferences, with per-channel failure isolation.

Usage:
    from infrastructure.notifications import (
        DeduplicationGuard,
        NotificationDispatcher,
        NotificationOutbox,
    )

    dispatcher = NotificationDispatcher(
        channels=[push, email, chat],
        users=user_repository,
        dedup_guard=DeduplicationGuard(InMemoryCache()),
        realtime=connection_manager,
    )
    outbox = NotificationOutbox(dispatcher)
    outbox.start()

    outbox.publish(notification)
"""

# Models
from infrastructure.notifications.models import (
    Notification,
    NotificationAction,
    NotificationMetadata,
    NotificationPriority,
    NotificationResult,
    NotificationStatus,
    NotificationType,
    PushDeliveryReport,
    RelatedModel,
    RelatedTo,
)
from infrastructure.notifications.preferences import (
    CategoryPreferences,
    Recipient,
    is_category_allowed,
)

# Pipeline
from infrastructure.notifications.dedup import DeduplicationGuard
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.outbox import NotificationOutbox

# Channels
from infrastructure.notifications.channels import (
    ChatChannel,
    EmailChannel,
    NotificationChannel,
    PushChannel,
    RealtimeSink,
    WebSocketConnectionManager,
)

__all__ = [
    # Models
    "Notification",
    "NotificationAction",
    "NotificationMetadata",
    "NotificationPriority",
    "NotificationResult",
    "NotificationStatus",
    "NotificationType",
    "PushDeliveryReport",
    "RelatedModel",
    "RelatedTo",
    "CategoryPreferences",
    "Recipient",
    "is_category_allowed",
    # Pipeline
    "DeduplicationGuard",
    "NotificationDispatcher",
    "NotificationOutbox",
    # Channels
    "NotificationChannel",
    "PushChannel",
    "EmailChannel",
    "ChatChannel",
    "RealtimeSink",
    "WebSocketConnectionManager",
]
