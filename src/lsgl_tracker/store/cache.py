"""Bounded memo cache for query results."""

import logging
from collections import OrderedDict
from datetime import date, datetime, time, timedelta
from typing import Any, Hashable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

MISSING = object()

QueryKey = Tuple[Optional[int], Optional[int], Optional[int]]


def _bound_to_micros(bound: Union[date, datetime, None]) -> Optional[int]:
    if bound is None:
        return None
    if not isinstance(bound, datetime):
        bound = datetime.combine(bound, time.min)
    epoch = datetime(1970, 1, 1, tzinfo=bound.tzinfo)
    return (bound - epoch) // timedelta(microseconds=1)


def query_key(
    days: Optional[int],
    start: Union[date, datetime, None] = None,
    end: Union[date, datetime, None] = None,
) -> QueryKey:
    """Canonical cache key: day window and bounds as epoch microseconds, None when unset."""
    return (days, _bound_to_micros(start), _bound_to_micros(end))


class QueryCache:
    """Mapping with a fixed capacity that evicts the oldest-inserted key.

    Reads do not refresh an entry's position; this is not an LRU.
    """

    def __init__(self, capacity: int, name: str = "query"):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.name = name
        self._entries: "OrderedDict[Hashable, Any]" = OrderedDict()

    def get(self, key: Hashable) -> Any:
        """Return the cached value, or MISSING."""
        return self._entries.get(key, MISSING)

    def put(self, key: Hashable, value: Any) -> None:
        self._entries[key] = value
        while len(self._entries) > self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("%s cache evicted %s", self.name, evicted)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> List[Hashable]:
        return list(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
