"""Notification records: service and domain-event builders."""

from modules.notifications.factory import NotificationFactory
from modules.notifications.service import NotificationService

__all__ = ["NotificationFactory", "NotificationService"]
