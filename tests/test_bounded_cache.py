"""Unit tests for the bounded TTL cache."""

import pytest

from conftest import FakeClock
from pokesnipe.store.bounded_cache import BoundedTTLCache


@pytest.fixture
def cache(clock):
    return BoundedTTLCache(ttl_s=60, max_size=3, clock=clock)


class TestBoundedTTLCache:
    """Test expiry, eviction and pruning."""

    def test_set_and_get(self, cache):
        cache.set("a", 1)

        assert cache.get("a") == 1
        assert "a" in cache
        assert len(cache) == 1

    def test_missing_key_returns_default(self, cache):
        assert cache.get("missing") is None
        assert cache.get("missing", "fallback") == "fallback"

    def test_entry_expires(self, cache, clock):
        cache.set("a", 1)
        clock.advance(60)

        assert cache.get("a") is None
        assert "a" not in cache

    def test_per_entry_ttl(self, cache, clock):
        cache.set("short", 1, ttl_s=5)
        cache.set("long", 2)
        clock.advance(10)

        assert cache.get("short") is None
        assert cache.get("long") == 2

    def test_oldest_evicted_when_full(self, cache):
        for key in "abcd":
            cache.set(key, key)

        assert "a" not in cache
        assert list(cache) == ["b", "c", "d"]

    def test_refresh_moves_to_newest(self, cache):
        for key in "abc":
            cache.set(key, key)
        cache.set("a", "again")
        cache.set("d", "d")

        assert "b" not in cache
        assert cache.get("a") == "again"

    def test_prune_removes_expired(self, cache, clock):
        cache.set("a", 1)
        clock.advance(30)
        cache.set("b", 2)
        clock.advance(31)

        assert cache.expired_keys() == ["a"]
        assert cache.prune() == 1
        assert list(cache) == ["b"]

    def test_items_skips_expired(self, cache, clock):
        cache.set("a", 1, ttl_s=1)
        cache.set("b", 2)
        clock.advance(2)

        assert cache.items() == [("b", 2)]

    def test_delete_and_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.delete("a") is True
        assert cache.delete("a") is False
        cache.clear()
        assert len(cache) == 0

    def test_falsy_values_are_present(self, cache):
        cache.set("zero", 0)

        assert "zero" in cache

    def test_stored_none_is_present(self, cache, clock):
        cache.set("empty", None)

        assert "empty" in cache
        assert "other" not in cache

        clock.advance(61)

        assert "empty" not in cache

    def test_rejects_empty_bound(self):
        with pytest.raises(ValueError):
            BoundedTTLCache(ttl_s=1, max_size=0)

    def test_eviction_at_scale(self):
        clock = FakeClock()
        cache = BoundedTTLCache(ttl_s=3600, max_size=10_000, clock=clock)
        for i in range(12_000):
            cache.set(i, i)

        assert len(cache) == 10_000
        assert 0 not in cache
        assert 11_999 in cache
