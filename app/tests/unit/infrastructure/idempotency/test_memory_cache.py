"""Unit tests for the bounded in-memory idempotency cache."""

import pytest

from infrastructure.idempotency import IdempotencyKeyBuilder, InMemoryCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.unit
class TestInMemoryCache:
    def test_get_returns_stored_value(self):
        cache = InMemoryCache()
        cache.set("k", {"claimed": True}, ttl_seconds=60)

        assert cache.get("k") == {"claimed": True}

    def test_get_missing_key_returns_none(self):
        cache = InMemoryCache()

        assert cache.get("missing") is None

    def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        cache = InMemoryCache(clock=clock)
        cache.set("k", {"claimed": True}, ttl_seconds=60)

        clock.now += 59
        assert cache.get("k") is not None

        clock.now += 1
        assert cache.get("k") is None
        assert cache.get_stats()["entries"] == 0

    def test_oldest_entries_evicted_above_capacity(self):
        cache = InMemoryCache(max_entries=2)
        cache.set("a", {"v": 1}, 60)
        cache.set("b", {"v": 2}, 60)
        cache.set("c", {"v": 3}, 60)

        assert cache.get("a") is None
        assert cache.get("b") == {"v": 2}
        assert cache.get("c") == {"v": 3}
        assert cache.get_stats()["evictions"] == 1

    def test_expired_entries_evicted_before_live_ones(self):
        clock = FakeClock()
        cache = InMemoryCache(max_entries=2, clock=clock)
        cache.set("old", {"v": 1}, 10)
        cache.set("live", {"v": 2}, 100)
        clock.now += 20
        cache.set("new", {"v": 3}, 100)

        assert cache.get("live") == {"v": 2}
        assert cache.get("new") == {"v": 3}
        assert cache.get_stats()["evictions"] == 0

    def test_clear_resets_entries_and_stats(self):
        cache = InMemoryCache()
        cache.set("k", {"v": 1}, 60)
        cache.get("k")

        cache.clear()

        stats = cache.get_stats()
        assert stats["entries"] == 0
        assert stats["hits"] == 0
        assert cache.get("k") is None

    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            InMemoryCache(max_entries=0)


@pytest.mark.unit
class TestIdempotencyKeyBuilder:
    def test_keys_are_stable_and_order_independent(self):
        builder = IdempotencyKeyBuilder(namespace="notification_dispatch")

        first = builder.build("transaction", related_id="t1", notification_type="x")
        second = builder.build("transaction", notification_type="x", related_id="t1")

        assert first == second
        assert first.startswith("notification_dispatch:transaction:")

    def test_different_components_give_different_keys(self):
        builder = IdempotencyKeyBuilder(namespace="notification_dispatch")

        assert builder.build("notification", notification_id="a") != builder.build(
            "notification", notification_id="b"
        )

    def test_rejects_namespace_with_separator(self):
        with pytest.raises(ValueError):
            IdempotencyKeyBuilder(namespace="a:b")


@pytest.mark.unit
class TestInMemoryCacheAdd:
    def test_add_stores_only_once(self):
        cache = InMemoryCache()

        assert cache.add("k", {"claimed": True}, 60) is True
        assert cache.add("k", {"claimed": True}, 60) is False
        assert cache.get("k") == {"claimed": True}

    def test_add_succeeds_again_after_expiry(self):
        clock = FakeClock()
        cache = InMemoryCache(clock=clock)
        cache.add("k", {"claimed": True}, 10)

        clock.now += 10

        assert cache.add("k", {"claimed": True}, 10) is True

    def test_each_add_on_a_full_cache_evicts_one_entry(self):
        cache = InMemoryCache(max_entries=3)
        for index in range(10):
            cache.add(f"k{index}", {"claimed": True}, 60)

        stats = cache.get_stats()
        assert stats["entries"] == 3
        assert stats["evictions"] == 7
        assert cache.get("k9") == {"claimed": True}
        assert cache.get("k6") is None
