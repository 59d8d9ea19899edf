"""Process-local claim store for notification dispatch.

    from infrastructure.idempotency import InMemoryCache, IdempotencyKeyBuilder

    cache = InMemoryCache(max_entries=10_000)
    key = IdempotencyKeyBuilder("notification_dispatch").build(
        "notification", notification_id="65f0c..."
    )
    first_time = cache.add(key, {"claimed": True}, ttl_seconds=3600)
"""

from infrastructure.idempotency.cache import IdempotencyCache
from infrastructure.idempotency.key_builder import IdempotencyKeyBuilder
from infrastructure.idempotency.memory import InMemoryCache

__all__ = [
    "IdempotencyCache",
    "IdempotencyKeyBuilder",
    "InMemoryCache",
]
