"""Flight tracking store: normalization, filtering, aggregation and cached queries."""

from lsgl_tracker.store.models import (
    DailyCount,
    EnrichedFlight,
    FlightRecord,
    FlightType,
    StateVectorRecord,
)
from lsgl_tracker.store.service import FlightDataController

__all__ = [
    "DailyCount",
    "EnrichedFlight",
    "FlightDataController",
    "FlightRecord",
    "FlightType",
    "StateVectorRecord",
]
