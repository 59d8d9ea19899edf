"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    ConnectionManagerDep,
    NotificationFactoryDep,
    NotificationServiceDep,
    SettingsDep,
    UserIdDep,
)
from infrastructure.services.providers import (
    build_notification_channels,
    get_connection_manager,
    get_dedup_guard,
    get_mongo_client,
    get_mongo_database,
    get_notification_dispatcher,
    get_notification_factory,
    get_notification_outbox,
    get_notification_repository,
    get_notification_service,
    get_profile_repository,
    get_settings,
    get_user_repository,
)

__all__ = [
    "ConnectionManagerDep",
    "NotificationFactoryDep",
    "NotificationServiceDep",
    "SettingsDep",
    "UserIdDep",
    "build_notification_channels",
    "get_connection_manager",
    "get_dedup_guard",
    "get_mongo_client",
    "get_mongo_database",
    "get_notification_dispatcher",
    "get_notification_factory",
    "get_notification_outbox",
    "get_notification_repository",
    "get_notification_service",
    "get_profile_repository",
    "get_settings",
    "get_user_repository",
]
