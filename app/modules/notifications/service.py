"""Notification record service.

Application boundary for creating notifications and for the user-facing
read, archive and delete operations. Creation persists the record and
hands it to the outbox; delivery happens on the outbox worker.
"""

import math
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from pymongo.errors import PyMongoError

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import Notification

if TYPE_CHECKING:
    from infrastructure.notifications.outbox import NotificationOutbox
    from infrastructure.persistence.notifications import NotificationRepository

logger = get_module_logger()


class NotificationService:
    """Create and manage notification records.

    Store errors propagate to the caller. Operations scoped to one record
    only match records owned by ``user_id``; a missing or foreign record
    yields ``None``.

    Usage:
        from infrastructure.services import NotificationServiceDep

        @router.get("/unread-count")
        def unread(service: NotificationServiceDep, user_id: UserIdDep):
            return {"count": service.get_unread_count(user_id)}
    """

    def __init__(
        self,
        repository: "NotificationRepository",
        outbox: "NotificationOutbox",
    ):
        self._repository = repository
        self._outbox = outbox

    def create_notification(
        self, data: Union[Notification, Mapping[str, Any]]
    ) -> Notification:
        """Validate, persist and publish a notification for dispatch."""
        notification = (
            data if isinstance(data, Notification) else Notification.model_validate(data)
        )
        try:
            created = self._repository.create(notification)
        except PyMongoError as e:
            logger.error(
                "notification_create_failed",
                recipient=notification.recipient,
                notification_type=notification.type,
                error=str(e),
            )
            raise

        logger.info(
            "notification_created",
            notification_id=created.id,
            recipient=created.recipient,
            notification_type=created.type,
        )
        self._outbox.publish(created)
        return created

    def get_user_notifications(
        self,
        user_id: str,
        is_read: Optional[bool] = None,
        is_archived: bool = False,
        limit: int = 10,
        page: int = 1,
    ) -> Dict[str, Any]:
        """Newest-first page of a user's notifications.

        Returns:
            ``{"notifications": [...], "pagination": {total, pages, page, limit}}``
        """
        if limit < 1 or page < 1:
            raise ValueError("page and limit must be positive")

        filters: Dict[str, Any] = {"recipient": user_id, "isArchived": is_archived}
        if is_read is not None:
            filters["isRead"] = is_read

        notifications = self._repository.find(
            filters, skip=(page - 1) * limit, limit=limit
        )
        total = self._repository.count(filters)
        return {
            "notifications": notifications,
            "pagination": {
                "total": total,
                "pages": math.ceil(total / limit),
                "page": page,
                "limit": limit,
            },
        }

    def mark_as_read(self, notification_id: str, user_id: str) -> Optional[Notification]:
        return self._repository.update_one(
            {"_id": notification_id, "recipient": user_id}, {"isRead": True}
        )

    def mark_all_as_read(self, user_id: str) -> int:
        """Mark every unread notification as read; returns the modified count."""
        modified = self._repository.update_many(
            {"recipient": user_id, "isRead": False}, {"isRead": True}
        )
        logger.info("notifications_marked_read", user_id=user_id, modified=modified)
        return modified

    def archive_notification(
        self, notification_id: str, user_id: str
    ) -> Optional[Notification]:
        return self._repository.update_one(
            {"_id": notification_id, "recipient": user_id}, {"isArchived": True}
        )

    def delete_notification(
        self, notification_id: str, user_id: str
    ) -> Optional[Notification]:
        return self._repository.delete_one(
            {"_id": notification_id, "recipient": user_id}
        )

    def get_unread_count(self, user_id: str) -> int:
        return self._repository.count(
            {"recipient": user_id, "isRead": False, "isArchived": False}
        )
