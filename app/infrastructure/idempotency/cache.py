"""Claim store interface used by the dispatch deduplication guard."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IdempotencyCache(ABC):
    """Key/value store with per-entry TTL and an atomic insert-if-absent.

    ``add`` is the only operation deduplication relies on; ``get`` and
    ``set`` exist for inspection and for overwriting a claim.
    """

    @abstractmethod
    def add(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> bool:
        """Store ``value`` unless a live entry exists. True when stored."""

    @abstractmethod
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Live value for ``key``, or None when absent or expired."""

    @abstractmethod
    def set(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        pass
