"""Reference data lookups for aircraft and airports."""

from lsgl_tracker.reference.aircraft import AircraftIndex, AircraftMetadataRecord
from lsgl_tracker.reference.airports import AirportIndex, AirportInfo, AirportMetadataRecord

__all__ = [
    "AircraftIndex",
    "AircraftMetadataRecord",
    "AirportIndex",
    "AirportInfo",
    "AirportMetadataRecord",
]
