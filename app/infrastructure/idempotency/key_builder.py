"""Deterministic claim keys."""

import hashlib
from typing import Any

HASH_LENGTH = 16


class IdempotencyKeyBuilder:
    """Build ``<namespace>:<kind>:<digest>`` keys.

    The digest covers the namespace, the kind and the sorted components, so
    keyword order does not matter and a notification id never collides with
    a transaction id of the same value.

    Example:
        >>> keys = IdempotencyKeyBuilder("notification_dispatch")
        >>> keys.build("transaction", related_id="65f0...", notification_type="system_notification")
        'notification_dispatch:transaction:3f1c0a9e5b7d2c44'
    """

    def __init__(self, namespace: str):
        if not namespace or ":" in namespace:
            raise ValueError("namespace must be non-empty and contain no ':'")
        self.namespace = namespace

    def build(self, kind: str, **components: Any) -> str:
        material = "|".join(
            [self.namespace, kind]
            + [f"{name}={components[name]}" for name in sorted(components)]
        )
        digest = hashlib.sha256(material.encode("utf-8")).hexdigest()[:HASH_LENGTH]
        return f"{self.namespace}:{kind}:{digest}"
