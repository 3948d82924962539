"""Unit tests for the per-entry TTL cache and cache key generation."""

from __future__ import annotations

import pytest

from lyrlib.interfaces.cache_provider import ICacheProvider
from lyrlib.providers.cache.memory_cache import TTLCache


# ======================================================================
# TTLCache
# ======================================================================


class TestTTLCache:
    @pytest.fixture()
    def cache(self, clock) -> TTLCache:
        return TTLCache(default_ttl=10.0, max_entries=100, clock=clock)

    def test_get_missing_key_returns_none(self, cache: TTLCache) -> None:
        assert cache.get("nonexistent") is None

    def test_set_and_get(self, cache: TTLCache) -> None:
        cache.set("key1", "value1")
        assert cache.get("key1") == "value1"

    def test_set_overwrites_and_restarts_clock(self, cache: TTLCache, clock) -> None:
        cache.set("key1", "old")
        clock.advance(8)
        cache.set("key1", "new")
        clock.advance(8)
        assert cache.get("key1") == "new"

    def test_entry_alive_at_exact_ttl(self, cache: TTLCache, clock) -> None:
        cache.set("key1", "value1")
        clock.advance(10.0)
        assert cache.get("key1") == "value1"

    def test_entry_expires_after_ttl(self, cache: TTLCache, clock) -> None:
        cache.set("key1", "value1")
        clock.advance(10.001)
        assert cache.get("key1") is None

    def test_expired_entry_evicted_on_read(self, cache: TTLCache, clock) -> None:
        cache.set("key1", "value1")
        clock.advance(11)
        assert cache.size() == 1
        cache.get("key1")
        assert cache.size() == 0

    def test_per_entry_ttl_overrides_default(self, cache: TTLCache, clock) -> None:
        cache.set("short", "a", ttl=1.0)
        cache.set("long", "b")
        clock.advance(2)
        assert cache.get("short") is None
        assert cache.get("long") == "b"

    def test_delete_reports_presence(self, cache: TTLCache) -> None:
        cache.set("key1", "value1")
        assert cache.delete("key1") is True
        assert cache.delete("key1") is False
        assert cache.get("key1") is None

    def test_clear(self, cache: TTLCache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert cache.size() == 0

    def test_size_counts_expired_entries_until_clean(self, cache: TTLCache, clock) -> None:
        cache.set("a", 1, ttl=1.0)
        cache.set("b", 2, ttl=100.0)
        clock.advance(5)
        assert cache.size() == 2
        assert cache.clean() == 1
        assert cache.size() == 1
        assert cache.get("b") == 2

    def test_clean_with_nothing_expired(self, cache: TTLCache) -> None:
        cache.set("a", 1)
        assert cache.clean() == 0

    def test_capacity_evicts_least_recently_used(self, clock) -> None:
        cache = TTLCache(default_ttl=60.0, max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3

    def test_stores_complex_values(self, cache: TTLCache) -> None:
        data = ({"track": "Hey Jude"}, {"track": "Let It Be"})
        cache.set("complex", data)
        assert cache.get("complex") is data


# ======================================================================
# generate_key
# ======================================================================


class TestGenerateKey:
    def test_sorted_parameters(self) -> None:
        assert ICacheProvider.generate_key("search", {"b": 2, "a": 1}) == "search:a:1|b:2"

    def test_insertion_order_irrelevant(self) -> None:
        first = TTLCache.generate_key("synced", {"track_name": "x", "artist_name": "y"})
        second = TTLCache.generate_key("synced", {"artist_name": "y", "track_name": "x"})
        assert first == second

    def test_none_values_skipped(self) -> None:
        key = ICacheProvider.generate_key("metadata", {"album_name": None, "track_name": "x"})
        assert key == "metadata:track_name:x"

    def test_prefix_namespaces_keys(self) -> None:
        params = {"track_name": "x", "artist_name": "y"}
        assert ICacheProvider.generate_key("synced", params) != ICacheProvider.generate_key(
            "unsynced", params
        )

    def test_empty_params(self) -> None:
        assert ICacheProvider.generate_key("stats", {}) == "stats:"
