"""Notification channel implementations."""

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.channels.chat import ChatChannel
from infrastructure.notifications.channels.email import EmailChannel
from infrastructure.notifications.channels.push import PushChannel
from infrastructure.notifications.channels.realtime import (
    RealtimeSink,
    WebSocketConnectionManager,
)

__all__ = [
    "NotificationChannel",
    "ChatChannel",
    "EmailChannel",
    "PushChannel",
    "RealtimeSink",
    "WebSocketConnectionManager",
]
