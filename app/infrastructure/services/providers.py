"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache
from typing import List

from pymongo import MongoClient
from pymongo.database import Database

from infrastructure.configuration import Settings
from infrastructure.idempotency import InMemoryCache
from infrastructure.logging import get_module_logger
from infrastructure.notifications import (
    ChatChannel,
    DeduplicationGuard,
    EmailChannel,
    NotificationChannel,
    NotificationDispatcher,
    NotificationOutbox,
    PushChannel,
    WebSocketConnectionManager,
)
from infrastructure.persistence import (
    NotificationRepository,
    ProfileRepository,
    UserRepository,
    create_client,
    get_database,
)
from integrations.email import EmailSender, TemplateLoader
from integrations.firebase import PushSender
from integrations.telegram import ChatNotifier
from modules.notifications import NotificationFactory, NotificationService

logger = get_module_logger()


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process.

    Infrastructure packages should use this directly to ensure singleton consistency:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_mongo_client() -> MongoClient:
    """Process-wide MongoDB client (pooled, thread-safe)."""
    return create_client(get_settings().mongodb)


def get_mongo_database() -> Database:
    return get_database(get_mongo_client(), get_settings().mongodb)


@lru_cache
def get_notification_repository() -> NotificationRepository:
    return NotificationRepository(get_mongo_database())


@lru_cache
def get_user_repository() -> UserRepository:
    return UserRepository(get_mongo_database())


@lru_cache
def get_profile_repository() -> ProfileRepository:
    return ProfileRepository(get_mongo_database())


@lru_cache
def get_connection_manager() -> WebSocketConnectionManager:
    """Websocket connections; also the dispatcher's real-time sink."""
    return WebSocketConnectionManager()


@lru_cache
def get_dedup_guard() -> DeduplicationGuard:
    settings = get_settings().idempotency
    return DeduplicationGuard(
        InMemoryCache(max_entries=settings.IDEMPOTENCY_MAX_ENTRIES),
        ttl_seconds=settings.IDEMPOTENCY_TTL_SECONDS,
    )


def build_notification_channels(settings: Settings) -> List[NotificationChannel]:
    """Channels in delivery order; unconfigured providers are left out.

    Returns:
        List of channels (push, email, chat) whose provider is configured.
    """
    users = get_user_repository()
    channels: List[NotificationChannel] = []

    if settings.firebase.is_configured:
        sender = PushSender(
            project_id=settings.firebase.FIREBASE_PROJECT_ID,
            credentials_file=settings.firebase.FIREBASE_CREDENTIALS_FILE,
            timeout_seconds=settings.firebase.FIREBASE_TIMEOUT_SECONDS,
        )
        channels.append(PushChannel(sender, users))

    if settings.email.is_configured:
        sender = EmailSender(
            host=settings.email.SMTP_HOST,
            port=settings.email.SMTP_PORT,
            username=settings.email.SMTP_USERNAME,
            password=settings.email.SMTP_PASSWORD,
            use_tls=settings.email.SMTP_USE_TLS,
            sender=settings.email.EMAIL_SENDER,
            timeout_seconds=settings.email.SMTP_TIMEOUT_SECONDS,
        )
        channels.append(
            EmailChannel(
                sender,
                TemplateLoader(settings.email.EMAIL_TEMPLATES_DIR),
                app_name=settings.APP_NAME,
                base_url=settings.server.FRONTEND_URL,
            )
        )

    if settings.telegram.is_configured:
        notifier = ChatNotifier(
            bot_token=settings.telegram.TELEGRAM_BOT_TOKEN,
            api_url=settings.telegram.TELEGRAM_API_URL,
            timeout_seconds=settings.telegram.TELEGRAM_TIMEOUT_SECONDS,
        )
        channels.append(ChatChannel(notifier, client_url=settings.server.CLIENT_URL))

    logger.info(
        "notification_channels_configured",
        channels=[channel.channel_name for channel in channels],
    )
    return channels


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher(
        channels=build_notification_channels(get_settings()),
        users=get_user_repository(),
        dedup_guard=get_dedup_guard(),
        realtime=get_connection_manager(),
    )


@lru_cache
def get_notification_outbox() -> NotificationOutbox:
    """The single outbox. Its worker is started by the application lifespan."""
    return NotificationOutbox(get_notification_dispatcher())


@lru_cache
def get_notification_service() -> NotificationService:
    """
    Get application-scoped notification service singleton.

    Usage:
        @router.patch("/{notification_id}/read")
        def mark_read(service: NotificationServiceDep, user_id: UserIdDep):
            return service.mark_as_read(notification_id, user_id)
    """
    return NotificationService(get_notification_repository(), get_notification_outbox())


@lru_cache
def get_notification_factory() -> NotificationFactory:
    return NotificationFactory(
        get_notification_service(), get_user_repository(), get_profile_repository()
    )
