"""Convert loosely-typed CSV rows into typed records."""

import math
import numbers
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from lsgl_tracker.reference.aircraft import AircraftMetadataRecord
from lsgl_tracker.reference.airports import AirportMetadataRecord
from lsgl_tracker.store.models import FlightRecord, FlightType, StateVectorRecord

FLIGHT_DATE_FIELDS = ("departure_date", "arrival_date", "departure_time", "arrival_time")
AIRCRAFT_KEY_FIELDS = ("ICAO24", "icao24")
ORIGIN_FIELD = "departure_airport_ICAO"
DESTINATION_FIELD = "destination_airport_ICAO"


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a date or datetime cell. Returns None when absent or unparseable.

    Numbers are read as epoch milliseconds. Instants with a known offset
    (timezone-aware text and epoch numbers) are converted to local time and
    returned naive, matching the local-midnight day cutoff.
    """
    if _is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        ts = pd.Timestamp(value)
    else:
        try:
            if isinstance(value, numbers.Real):
                ts = pd.to_datetime(value, unit="ms", utc=True, errors="coerce")
            else:
                ts = pd.to_datetime(str(value).strip(), errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
    if ts is None or pd.isna(ts):
        return None
    dt = ts.to_pydatetime()
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def parse_epoch_seconds(value: Any) -> Optional[datetime]:
    """Convert Unix epoch seconds to a naive local datetime."""
    if _is_missing(value) or isinstance(value, bool):
        return None
    try:
        seconds = float(value)
        if math.isnan(seconds):
            return None
        return datetime.fromtimestamp(seconds)
    except (ValueError, TypeError, OverflowError, OSError):
        return None


def _get_str(row: Mapping[str, Any], *keys: str) -> Optional[str]:
    for k in keys:
        v = row.get(k)
        if _is_missing(v):
            continue
        # CSV readers turn numeric-looking codes into floats
        if isinstance(v, float) and v.is_integer():
            v = int(v)
        s = str(v).strip()
        if s:
            return s
    return None


def _extra(row: Mapping[str, Any], consumed: Iterable[str]) -> Dict[str, Any]:
    skip = set(consumed)
    return {k: v for k, v in row.items() if k not in skip}


def normalize_flight(row: Mapping[str, Any], flight_type: FlightType) -> FlightRecord:
    """Build one FlightRecord from a raw row."""
    return FlightRecord(
        flight_type=flight_type,
        aircraft_icao24=_get_str(row, *AIRCRAFT_KEY_FIELDS),
        origin_airport_icao=_get_str(row, ORIGIN_FIELD),
        destination_airport_icao=_get_str(row, DESTINATION_FIELD),
        departure_date=parse_timestamp(row.get("departure_date")),
        arrival_date=parse_timestamp(row.get("arrival_date")),
        departure_time=parse_timestamp(row.get("departure_time")),
        arrival_time=parse_timestamp(row.get("arrival_time")),
        extra=_extra(
            row,
            FLIGHT_DATE_FIELDS + AIRCRAFT_KEY_FIELDS + (ORIGIN_FIELD, DESTINATION_FIELD),
        ),
    )


def normalize_flights(
    rows: Iterable[Mapping[str, Any]], flight_type: FlightType
) -> List[FlightRecord]:
    """Normalize every row of an arrivals or departures dataset."""
    return [normalize_flight(row, flight_type) for row in rows]


def normalize_state_vectors(rows: Iterable[Mapping[str, Any]]) -> List[StateVectorRecord]:
    """Normalize state vectors. requested_time is epoch seconds in the source."""
    return [
        StateVectorRecord(
            requested_time=parse_epoch_seconds(row.get("requested_time")),
            arrival_date=parse_timestamp(row.get("arrival_date")),
            departure_date=parse_timestamp(row.get("departure_date")),
            extra=_extra(row, ("requested_time", "arrival_date", "departure_date")),
        )
        for row in rows
    ]


def normalize_aircraft(rows: Iterable[Mapping[str, Any]]) -> List[AircraftMetadataRecord]:
    return [
        AircraftMetadataRecord(
            icao24=_get_str(row, "icao24", "ICAO24"),
            fields=dict(row),
        )
        for row in rows
    ]


def normalize_airports(rows: Iterable[Mapping[str, Any]]) -> List[AirportMetadataRecord]:
    return [AirportMetadataRecord(fields=dict(row)) for row in rows]
