"""Flight data controller - loading, filtering, joining and cached queries."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Union

import pandas as pd

from lsgl_tracker.reference import (
    AircraftIndex,
    AircraftMetadataRecord,
    AirportIndex,
    AirportInfo,
)
from lsgl_tracker.store.cache import MISSING, QueryCache, query_key
from lsgl_tracker.store.filters import (
    as_end,
    as_start,
    combine_flights,
    filter_by_bounds,
    filter_by_days,
    keep_most_recent,
)
from lsgl_tracker.store.models import DailyCount, EnrichedFlight, FlightRecord, FlightType
from lsgl_tracker.store.normalize import (
    normalize_aircraft,
    normalize_airports,
    normalize_flights,
    normalize_state_vectors,
)
from lsgl_tracker.store.sources.base import Dataset
from lsgl_tracker.store.sources.github import GitHubCsvSource
from lsgl_tracker.store.stats import daily_counts

logger = logging.getLogger(__name__)

DEFAULT_DAYS = 7
MAX_FLIGHTS = 1000
FLIGHT_CACHE_SIZE = 10
COUNTS_CACHE_SIZE = 5

Bound = Union[date, datetime, None]

# Dataset -> (controller attribute, normalizer)
_LOAD_PLAN: Dict[Dataset, tuple] = {
    Dataset.ARRIVALS: (
        "arrivals",
        lambda rows: normalize_flights(rows, FlightType.ARRIVAL),
    ),
    Dataset.DEPARTURES: (
        "departures",
        lambda rows: normalize_flights(rows, FlightType.DEPARTURE),
    ),
    Dataset.ARRIVAL_STATE_VECTORS: ("arrival_state_vectors", normalize_state_vectors),
    Dataset.DEPARTURE_STATE_VECTORS: ("departure_state_vectors", normalize_state_vectors),
    Dataset.AIRCRAFT_METADATA: ("aircraft_metadata", normalize_aircraft),
    Dataset.AIRPORT_METADATA: ("airport_metadata", normalize_airports),
}


class FlightDataController:
    """Owns the loaded datasets and answers the dashboard's queries.

    Queries are memoized per (days, start, end) in two bounded caches, one for
    flight lists and one for daily counts. Both are cleared whenever new data
    is loaded.
    """

    def __init__(
        self,
        source=None,
        max_workers: int = len(_LOAD_PLAN),
        max_flights: int = MAX_FLIGHTS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._source = source or GitHubCsvSource()
        self._max_workers = max_workers
        self.max_flights = max_flights
        self._clock = clock or datetime.now

        self.arrivals: List[FlightRecord] = []
        self.departures: List[FlightRecord] = []
        self.arrival_state_vectors: List = []
        self.departure_state_vectors: List = []
        self.aircraft_metadata: List[AircraftMetadataRecord] = []
        self.airport_metadata: List = []
        self._aircraft_index = AircraftIndex()
        self._airport_index = AirportIndex()

        self.loading = False
        self.processing = False
        self.error: Optional[str] = None
        self.load_errors: List[str] = []

        self.date_range_days = DEFAULT_DAYS
        self.date_range_start: Optional[datetime] = None
        self.date_range_end: Optional[datetime] = None

        self._flights_cache = QueryCache(FLIGHT_CACHE_SIZE, name="flights")
        self._counts_cache = QueryCache(COUNTS_CACHE_SIZE, name="daily counts")

    # Loading

    def _fetch_one(self, dataset: Dataset) -> list:
        _, normalize = _LOAD_PLAN[dataset]
        return normalize(self._source.fetch_rows(dataset))

    def load_data(self) -> bool:
        """Fetch and normalize all datasets concurrently.

        A failing dataset is left empty and its error recorded; the others
        still load. `error` is set only when every dataset failed. Returns
        True when at least one dataset loaded.
        """
        self.loading = True
        self.error = None
        self.load_errors = []
        loaded = 0

        try:
            logger.info(
                "Loading flight data from %s", getattr(self._source, "base_url", self._source)
            )
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                future_to_dataset = {
                    executor.submit(self._fetch_one, dataset): dataset for dataset in _LOAD_PLAN
                }
                for future in as_completed(future_to_dataset):
                    dataset = future_to_dataset[future]
                    attr, _ = _LOAD_PLAN[dataset]
                    try:
                        records = future.result()
                    except Exception as e:
                        logger.error("Error loading %s: %s", dataset.filename, e)
                        self.load_errors.append(f"{dataset.filename}: {e}")
                        records = []
                    else:
                        loaded += 1
                    setattr(self, attr, records)

            self._aircraft_index = AircraftIndex(self.aircraft_metadata)
            self._airport_index = AirportIndex(self.airport_metadata)
            self.invalidate()

            if not loaded:
                self.error = "Failed to load flight data: " + "; ".join(self.load_errors)
                logger.error(self.error)
            elif self.load_errors:
                logger.warning(
                    "Loaded %d of %d datasets; failures: %s",
                    loaded,
                    len(_LOAD_PLAN),
                    "; ".join(self.load_errors),
                )

            logger.info(
                "Loaded %d arrivals, %d departures", len(self.arrivals), len(self.departures)
            )
            logger.info(
                "Loaded %d arrival state vectors, %d departure state vectors",
                len(self.arrival_state_vectors),
                len(self.departure_state_vectors),
            )
        finally:
            self.loading = False
            self.processing = False

        return loaded > 0

    def invalidate(self) -> None:
        """Drop all cached query results."""
        self._flights_cache.clear()
        self._counts_cache.clear()

    # Date range

    def set_date_range(
        self, days: Optional[int] = None, start: Bound = None, end: Bound = None
    ) -> None:
        """Set the default query window. Explicit start and end override days."""
        self.date_range_days = DEFAULT_DAYS if days is None else days
        if start is not None and end is not None:
            self.date_range_start = as_start(start)
            self.date_range_end = as_end(end)
        else:
            self.date_range_start = None
            self.date_range_end = None

    def _resolve_range(self, days: Optional[int], start: Bound, end: Bound):
        if days is None:
            days = self.date_range_days
        if start is None and end is None:
            start, end = self.date_range_start, self.date_range_end
        if start is None or end is None:
            return days, None, None
        return days, as_start(start), as_end(end)

    # Queries

    def all_flights(self) -> List[FlightRecord]:
        """Arrivals and departures merged by date, unfiltered."""
        return combine_flights(self.arrivals, self.departures)

    def _filter(self, records, date_field: str, days: int, start, end) -> List[FlightRecord]:
        if start is not None and end is not None:
            return filter_by_bounds(records, start, end, date_field)
        return filter_by_days(records, days, date_field, today=self._clock())

    def _enrich(self, flight: FlightRecord) -> EnrichedFlight:
        return EnrichedFlight(
            flight=flight,
            aircraft_metadata=self._aircraft_index.resolve(flight.aircraft_icao24),
            airport_info=self._airport_index.info(flight.remote_airport_icao),
        )

    def _compute_flights(self, days: int, start, end) -> List[EnrichedFlight]:
        per_side = self.max_flights // 2
        arrivals = keep_most_recent(
            self._filter(self.arrivals, "arrival_date", days, start, end), per_side
        )
        departures = keep_most_recent(
            self._filter(self.departures, "departure_date", days, start, end), per_side
        )
        return [self._enrich(f) for f in combine_flights(arrivals, departures)]

    def _cached(self, cache: QueryCache, key, compute: Callable[[], Any]) -> Any:
        value = cache.get(key)
        if value is not MISSING:
            logger.debug("%s cache hit for %s", cache.name, key)
            return value

        logger.debug("%s cache miss for %s", cache.name, key)
        # Counts are computed from the flight list, so misses can nest
        outer = self.processing
        self.processing = True
        try:
            value = compute()
            cache.put(key, value)
        finally:
            self.processing = outer
        return value

    def get_filtered_flights(
        self, days: Optional[int] = None, start: Bound = None, end: Bound = None
    ) -> List[EnrichedFlight]:
        """Flights in the window, joined with metadata, ordered by date."""
        days, start, end = self._resolve_range(days, start, end)
        key = query_key(days, start, end)
        return self._cached(
            self._flights_cache, key, lambda: self._compute_flights(days, start, end)
        )

    def get_daily_counts(
        self, days: Optional[int] = None, start: Bound = None, end: Bound = None
    ) -> List[DailyCount]:
        """Per-day arrival and departure counts for the window."""
        days, start, end = self._resolve_range(days, start, end)
        key = query_key(days, start, end)
        return self._cached(
            self._counts_cache,
            key,
            lambda: daily_counts(self.get_filtered_flights(days, start, end)),
        )

    def get_airport_info(self, icao: Optional[str]) -> Optional[AirportInfo]:
        return self._airport_index.info(icao)

    def get_aircraft_info(self, icao24: Optional[str]) -> Optional[AircraftMetadataRecord]:
        return self._aircraft_index.resolve(icao24)

    @staticmethod
    def to_dataframe(flights: List[EnrichedFlight]) -> pd.DataFrame:
        """Convert enriched flights to a pandas DataFrame."""
        columns = [
            "flight_type",
            "aircraft_icao24",
            "origin_airport_icao",
            "destination_airport_icao",
            "departure_time",
            "arrival_time",
            "date",
            "airport_name",
            "airport_city",
            "airport_country",
        ]
        if not flights:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(
            [
                {
                    "flight_type": f.flight_type.value,
                    "aircraft_icao24": f.aircraft_icao24,
                    "origin_airport_icao": f.origin_airport_icao,
                    "destination_airport_icao": f.destination_airport_icao,
                    "departure_time": f.departure_time,
                    "arrival_time": f.arrival_time,
                    "date": f.primary_date,
                    "airport_name": f.airport_info.name if f.airport_info else None,
                    "airport_city": f.airport_info.city if f.airport_info else None,
                    "airport_country": f.airport_info.country if f.airport_info else None,
                }
                for f in flights
            ],
            columns=columns,
        )
