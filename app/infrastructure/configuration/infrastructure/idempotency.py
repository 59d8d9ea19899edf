"""Idempotency infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class IdempotencySettings(InfrastructureSettings):
    """Deduplication cache configuration for notification dispatch.

    Environment Variables:
        IDEMPOTENCY_TTL_SECONDS: Time-to-live for dedup entries (default: 86400s = 24h)
        IDEMPOTENCY_MAX_ENTRIES: Upper bound on cached keys (default: 100000)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        ttl = settings.idempotency.IDEMPOTENCY_TTL_SECONDS
        ```
    """

    IDEMPOTENCY_TTL_SECONDS: int = Field(default=86400, alias="IDEMPOTENCY_TTL_SECONDS")
    IDEMPOTENCY_MAX_ENTRIES: int = Field(default=100_000, alias="IDEMPOTENCY_MAX_ENTRIES")
