import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from pymongo.errors import PyMongoError
from structlog.stdlib import BoundLogger

from infrastructure.logging import configure_logging
from infrastructure.persistence import ensure_indexes
from infrastructure.services import (
    get_connection_manager,
    get_mongo_database,
    get_notification_outbox,
    get_settings,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _log_startup_settings(settings: "Settings", logger: BoundLogger) -> None:
    """Log which integrations are usable; values are never logged."""
    logger.info(
        "configuration_initialized",
        environment="production" if settings.is_production else "development",
        git_sha=settings.GIT_SHA,
        push_configured=settings.firebase.is_configured,
        email_configured=settings.email.is_configured,
        chat_configured=settings.telegram.is_configured,
        dedup_ttl_seconds=settings.idempotency.IDEMPOTENCY_TTL_SECONDS,
    )


def _ensure_indexes(logger: BoundLogger) -> None:
    try:
        names = ensure_indexes(get_mongo_database())
        logger.info("notification_indexes_ready", indexes=names)
    except PyMongoError as exc:
        logger.error("notification_indexes_failed", error=str(exc))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = configure_logging(settings=settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _log_startup_settings(settings, logger)
    _ensure_indexes(logger)

    get_connection_manager().bind_loop(asyncio.get_running_loop())

    outbox = get_notification_outbox()
    outbox.start()
    app.state.outbox = outbox

    yield

    logger.info("application_shutdown", pending_notifications=outbox.pending())
    # Joining the worker blocks.
    await asyncio.to_thread(outbox.stop)
