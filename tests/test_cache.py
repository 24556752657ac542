"""Tests for the TTL response cache."""

from civicforum.services.cache import MISSING, TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestTTLCache:
    """Tests for TTLCache."""

    def test_returns_missing_for_unknown_key(self):
        """Should return MISSING for a key that was never set."""
        assert TTLCache().get("nope") is MISSING

    def test_returns_value_within_ttl(self):
        """Should return the stored value before it expires."""
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.set("k", {"a": 1}, ttl=60)
        clock.now += 59
        assert cache.get("k") == {"a": 1}

    def test_expires_after_ttl(self):
        """Should drop the entry once its TTL has elapsed."""
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.set("k", "v", ttl=60)
        clock.now += 60
        assert cache.get("k") is MISSING
        assert len(cache) == 0

    def test_entries_have_independent_ttls(self):
        """Should expire each entry on its own schedule."""
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.set("short", 1, ttl=10)
        cache.set("long", 2, ttl=100)
        clock.now += 50
        assert "short" not in cache
        assert "long" in cache

    def test_ignores_non_positive_ttl(self):
        """Should not store entries with a zero TTL."""
        cache = TTLCache()
        cache.set("k", "v", ttl=0)
        assert cache.get("k") is MISSING

    def test_evicts_least_recently_used(self):
        """Should evict the least recently used entry when full."""
        cache = TTLCache(max_entries=2)
        cache.set("a", 1, ttl=60)
        cache.set("b", 2, ttl=60)
        cache.get("a")
        cache.set("c", 3, ttl=60)
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_invalidate(self):
        """Should drop one key or everything."""
        cache = TTLCache()
        cache.set("a", 1, ttl=60)
        cache.set("b", 2, ttl=60)
        cache.invalidate("a")
        assert "a" not in cache
        cache.invalidate()
        assert len(cache) == 0
