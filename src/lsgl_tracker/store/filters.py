"""Date-range filtering and chronological merging of flight records."""

from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence, TypeVar, Union

from lsgl_tracker.store.models import FlightRecord

R = TypeVar("R")
Bound = Union[date, datetime]


def _valid_date(record, date_field: str) -> Optional[datetime]:
    value = getattr(record, date_field, None)
    if isinstance(value, datetime):
        return value
    return None


def cutoff_for_days(days: int, today: Optional[Bound] = None) -> datetime:
    """Return local midnight of `today` minus `days` days.

    An aware `today` is read in local time like every other timestamp.
    """
    now = today or datetime.now()
    day = _naive(now).date() if isinstance(now, datetime) else now
    midnight = datetime.combine(day, time.min)
    return midnight - timedelta(days=max(days, 0))


def filter_by_days(
    records: Sequence[R],
    days: int,
    date_field: str,
    today: Optional[Bound] = None,
) -> List[R]:
    """Keep records dated on or after midnight `days` days ago.

    There is no upper bound, so future-dated records are kept.
    """
    cutoff = cutoff_for_days(days, today)
    result = []
    for r in records:
        d = _valid_date(r, date_field)
        if d is not None and d >= cutoff:
            result.append(r)
    return result


def _naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def as_start(bound: Bound) -> datetime:
    if isinstance(bound, datetime):
        return _naive(bound)
    return datetime.combine(bound, time.min)


def as_end(bound: Bound) -> datetime:
    if isinstance(bound, datetime):
        return _naive(bound)
    return datetime.combine(bound, time.max)


def filter_by_bounds(
    records: Sequence[R],
    start: Bound,
    end: Bound,
    date_field: str,
) -> List[R]:
    """Keep records whose date falls in [start, end]. Plain dates cover the whole day."""
    lo = as_start(start)
    hi = as_end(end)
    result = []
    for r in records:
        d = _valid_date(r, date_field)
        if d is not None and lo <= d <= hi:
            result.append(r)
    return result


def keep_most_recent(records: Sequence[R], limit: int) -> List[R]:
    """Keep the last `limit` records in source order."""
    if limit <= 0:
        return []
    return list(records[-limit:])


def _sort_key(record: FlightRecord):
    d = record.primary_date
    # Undated records go last; sorted() is stable so ties keep input order
    if d is None:
        return (1, datetime.min)
    return (0, d)


def combine_flights(
    arrivals: Sequence[FlightRecord], departures: Sequence[FlightRecord]
) -> List[FlightRecord]:
    """Merge arrivals and departures into one list ordered by primary date."""
    return sorted([*arrivals, *departures], key=_sort_key)
