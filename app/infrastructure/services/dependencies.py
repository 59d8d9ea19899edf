"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated

from fastapi import Depends, Header

from infrastructure.configuration import Settings
from infrastructure.notifications import WebSocketConnectionManager
from infrastructure.services.providers import (
    get_connection_manager,
    get_notification_factory,
    get_notification_service,
    get_settings,
)
from modules.notifications import NotificationFactory, NotificationService


def get_current_user_id(x_user_id: Annotated[str, Header()]) -> str:
    """Caller id supplied by the upstream gateway in ``X-User-Id``."""
    return x_user_id


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Notification record service
NotificationServiceDep = Annotated[
    NotificationService, Depends(get_notification_service)
]

# Domain-event builders
NotificationFactoryDep = Annotated[
    NotificationFactory, Depends(get_notification_factory)
]

# Websocket connection registry (real-time sink)
ConnectionManagerDep = Annotated[
    WebSocketConnectionManager, Depends(get_connection_manager)
]

# Authenticated caller
UserIdDep = Annotated[str, Depends(get_current_user_id)]

__all__ = [
    "SettingsDep",
    "NotificationServiceDep",
    "NotificationFactoryDep",
    "ConnectionManagerDep",
    "UserIdDep",
    "get_current_user_id",
]
