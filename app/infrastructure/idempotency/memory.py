"""In-memory idempotency cache with TTL and size bounds."""

import time
from collections import OrderedDict
from threading import Lock
from typing import Any, Callable, Dict, Optional, Tuple

from infrastructure.idempotency.cache import IdempotencyCache
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class InMemoryCache(IdempotencyCache):
    """Process-local idempotency cache.

    Entries expire after their TTL and the oldest entries are evicted once
    ``max_entries`` is reached, so memory stays bounded in long-running
    processes. State is lost on restart.

    Example:
        cache = InMemoryCache(max_entries=10_000)
        cache.add("notification_dispatch:notification:ab12", {"claimed": True}, 3600)  # True
        cache.add("notification_dispatch:notification:ab12", {"claimed": True}, 3600)  # False
    """

    def __init__(
        self,
        max_entries: int = 100_000,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize in-memory cache.

        Args:
            max_entries: Maximum number of live keys kept.
            clock: Monotonic time source (injectable for tests).
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Dict[str, Any]]]" = OrderedDict()
        self._lock = Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _live(self, key: str) -> Optional[Dict[str, Any]]:
        """Live value for ``key``, dropping it when expired. Caller holds the lock."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        return value

    def add(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> bool:
        with self._lock:
            if self._live(key) is not None:
                self._hits += 1
                return False
            self._misses += 1
            self._entries[key] = (self._clock() + ttl_seconds, value)
            self._evict()
            return True

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            value = self._live(key)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def set(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock() + ttl_seconds, value)
            self._evict()

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0
        logger.debug("idempotency_cache_cleared", backend="memory")

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "backend": "memory",
                "entries": len(self._entries),
                "max_entries": self.max_entries,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def _evict(self) -> None:
        """Bring the cache back to capacity. Caller must hold the lock.

        Removes entries from the front (oldest insertion) until the cache
        fits, so each call touches only what it removes. Only live entries
        count as evictions; expired ones elsewhere are dropped on access.
        """
        if len(self._entries) <= self.max_entries:
            return

        now = self._clock()
        while len(self._entries) > self.max_entries:
            oldest_key = next(iter(self._entries))
            expires_at, _ = self._entries[oldest_key]
            del self._entries[oldest_key]
            if expires_at > now:
                self._evictions += 1
