"""Data models for flight tracking records."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from lsgl_tracker.reference.aircraft import AircraftMetadataRecord
from lsgl_tracker.reference.airports import AirportInfo


class FlightType(Enum):
    """Direction of a flight relative to the tracked airfield."""

    ARRIVAL = "arrival"
    DEPARTURE = "departure"


@dataclass(frozen=True)
class FlightRecord:
    """Normalized arrival or departure record."""

    flight_type: FlightType
    aircraft_icao24: Optional[str] = None
    origin_airport_icao: Optional[str] = None
    destination_airport_icao: Optional[str] = None
    departure_date: Optional[datetime] = None
    arrival_date: Optional[datetime] = None
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    # Source columns without a typed field
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def primary_date_field(self) -> str:
        """Name of the date field used for sorting and filtering."""
        if self.flight_type is FlightType.ARRIVAL:
            return "arrival_date"
        return "departure_date"

    @property
    def primary_date(self) -> Optional[datetime]:
        return getattr(self, self.primary_date_field)

    @property
    def remote_airport_icao(self) -> Optional[str]:
        """Airport at the other end of the flight."""
        if self.flight_type is FlightType.ARRIVAL:
            return self.origin_airport_icao
        return self.destination_airport_icao


@dataclass(frozen=True)
class StateVectorRecord:
    """Positional sample tied to a flight."""

    requested_time: Optional[datetime] = None
    arrival_date: Optional[datetime] = None
    departure_date: Optional[datetime] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class EnrichedFlight:
    """Flight record joined with aircraft and airport metadata."""

    flight: FlightRecord
    aircraft_metadata: Optional[AircraftMetadataRecord] = None
    airport_info: Optional[AirportInfo] = None

    def __getattr__(self, name: str) -> Any:
        # Only called for attributes not found on the wrapper itself
        if name == "flight":
            raise AttributeError(name)
        return getattr(self.flight, name)


@dataclass
class DailyCount:
    """Arrival and departure counts for one calendar day."""

    date: date
    arrivals: int = 0
    departures: int = 0

    @property
    def total(self) -> int:
        return self.arrivals + self.departures

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "date": self.date,
            "arrivals": self.arrivals,
            "departures": self.departures,
        }
