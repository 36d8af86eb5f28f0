"""Abstract interface for flight data sources."""

from enum import Enum
from typing import Any, Dict, List, Protocol, runtime_checkable


class Dataset(Enum):
    """CSV datasets published by the tracker, valued by file name."""

    ARRIVALS = "bl_arr_all.csv"
    DEPARTURES = "bl_dep_all.csv"
    ARRIVAL_STATE_VECTORS = "bl_arr_SV_all.csv"
    DEPARTURE_STATE_VECTORS = "bl_dep_SV_all.csv"
    AIRCRAFT_METADATA = "aircraft_metadata.csv"
    AIRPORT_METADATA = "airports.csv"

    @property
    def filename(self) -> str:
        return self.value


class SourceError(Exception):
    """A dataset could not be fetched or parsed."""


@runtime_checkable
class RowSource(Protocol):
    """Protocol for pluggable CSV row sources."""

    def fetch_rows(self, dataset: Dataset) -> List[Dict[str, Any]]:
        """Fetch one dataset as a list of column-name to value mappings.

        Missing cells are None. Raises SourceError on failure.
        """
        ...
