"""Deduplication guard for notification dispatch.

Makes dispatch at-most-once per process: one claim per notification id and,
for Transaction-linked notifications, one claim per (transaction id, type).
State lives in an injected idempotency cache so it is bounded by TTL and
capacity and can be reset between tests.
"""

from infrastructure.idempotency import IdempotencyCache, IdempotencyKeyBuilder
from infrastructure.logging import get_module_logger

logger = get_module_logger()

DEDUP_NAMESPACE = "notification_dispatch"


class DeduplicationGuard:
    """Claims recorded through the cache's atomic ``add``.

    Example:
        guard = DeduplicationGuard(InMemoryCache(max_entries=10_000), ttl_seconds=86400)
        if guard.claim_notification(notification.id):
            ...  # first time this process sees it
    """

    def __init__(self, cache: IdempotencyCache, ttl_seconds: int = 86400):
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self._keys = IdempotencyKeyBuilder(namespace=DEDUP_NAMESPACE)

    def claim_notification(self, notification_id: str) -> bool:
        """Claim a notification id. False if it was already claimed."""
        key = self._keys.build("notification", notification_id=notification_id)
        return self._claim(key)

    def claim_transaction(self, related_id: str, notification_type: str) -> bool:
        """Claim a (transaction id, notification type) pair."""
        key = self._keys.build(
            "transaction",
            related_id=related_id,
            notification_type=notification_type,
        )
        return self._claim(key)

    def reset(self) -> None:
        self.cache.clear()

    def _claim(self, key: str) -> bool:
        claimed = self.cache.add(key, {"claimed": True}, self.ttl_seconds)
        if not claimed:
            logger.debug("dedup_claim_rejected", key=key)
        return claimed
