"""Unit tests for the bounded query cache."""

from datetime import date, datetime

import pytest

from lsgl_tracker.store.cache import MISSING, QueryCache, query_key


class TestQueryKey:
    """Tests for query_key."""

    def test_days_only(self) -> None:
        assert query_key(7) == (7, None, None)

    def test_bounds_as_epoch_micros(self) -> None:
        key = query_key(7, datetime(1970, 1, 1, 0, 0, 1), datetime(1970, 1, 2))
        assert key == (7, 1_000_000, 86_400_000_000)

    def test_date_bound_is_midnight(self) -> None:
        assert query_key(None, date(1970, 1, 2), None) == (None, 86_400_000_000, None)

    def test_sub_millisecond_bounds_get_distinct_keys(self) -> None:
        """Bounds that differ below one millisecond must not share a key."""
        start = datetime(2024, 1, 10)
        early = query_key(None, start, datetime(2024, 1, 10, 12, 0, 0, 100))
        late = query_key(None, start, datetime(2024, 1, 10, 12, 0, 0, 900))
        assert early != late
        assert late[2] - early[2] == 800


class TestQueryCache:
    """Tests for QueryCache."""

    def test_miss_returns_sentinel(self) -> None:
        assert QueryCache(3).get("a") is MISSING

    def test_put_and_get_same_object(self) -> None:
        cache = QueryCache(3)
        value = [1, 2, 3]
        cache.put("a", value)
        assert cache.get("a") is value
        assert "a" in cache

    def test_cached_none_is_not_a_miss(self) -> None:
        """A stored None is returned as a hit, not the sentinel."""
        cache = QueryCache(3)
        cache.put("a", None)
        assert cache.get("a") is None

    def test_eleventh_key_evicts_first(self) -> None:
        cache = QueryCache(10)
        for i in range(11):
            cache.put(query_key(i), i)
        assert len(cache) == 10
        assert query_key(0) not in cache
        assert cache.get(query_key(0)) is MISSING
        assert cache.keys()[0] == query_key(1)

    def test_eviction_ignores_reads(self) -> None:
        """Reading an entry does not protect it from eviction."""
        cache = QueryCache(2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)
        assert "a" not in cache
        assert cache.keys() == ["b", "c"]

    def test_reput_keeps_insertion_position(self) -> None:
        """Overwriting a key does not move it to the back of the queue."""
        cache = QueryCache(2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("a", 10)
        cache.put("c", 3)
        assert cache.keys() == ["b", "c"]

    def test_clear(self) -> None:
        cache = QueryCache(2)
        cache.put("a", 1)
        cache.clear()
        assert len(cache) == 0

    def test_invalid_capacity(self) -> None:
        with pytest.raises(ValueError, match="capacity"):
            QueryCache(0)
