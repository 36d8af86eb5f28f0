"""Per-day aggregation of flight records."""

from datetime import datetime
from typing import Dict, Iterable, List, Union

import pandas as pd

from lsgl_tracker.store.models import DailyCount, EnrichedFlight, FlightRecord, FlightType


def daily_counts(flights: Iterable[Union[FlightRecord, EnrichedFlight]]) -> List[DailyCount]:
    """Count arrivals and departures per calendar day, ascending by date.

    Flights without a valid primary date are skipped.
    """
    counts: Dict = {}

    for f in flights:
        primary = f.primary_date
        if not isinstance(primary, datetime):
            continue

        day = primary.date()
        entry = counts.get(day)
        if entry is None:
            entry = counts[day] = DailyCount(date=day)

        if f.flight_type is FlightType.ARRIVAL:
            entry.arrivals += 1
        else:
            entry.departures += 1

    return [counts[d] for d in sorted(counts)]


def daily_counts_dataframe(counts: List[DailyCount]) -> pd.DataFrame:
    """Return daily counts as DataFrame."""
    if not counts:
        return pd.DataFrame(columns=["date", "arrivals", "departures"])
    return pd.DataFrame([c.to_dict() for c in counts])
