"""Pytest configuration and fixtures."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure src is on path when running tests without installed package
src = Path(__file__).resolve().parent.parent / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))

from lsgl_tracker.store.models import FlightRecord, FlightType  # noqa: E402


def make_arrival(arrival_date=None, icao24="4b1814", origin="LSGG", **extra) -> FlightRecord:
    return FlightRecord(
        flight_type=FlightType.ARRIVAL,
        aircraft_icao24=icao24,
        origin_airport_icao=origin,
        destination_airport_icao="LSGL",
        arrival_date=arrival_date,
        extra=extra,
    )


def make_departure(departure_date=None, icao24="4b1814", destination="LSZB", **extra) -> FlightRecord:
    return FlightRecord(
        flight_type=FlightType.DEPARTURE,
        aircraft_icao24=icao24,
        origin_airport_icao="LSGL",
        destination_airport_icao=destination,
        departure_date=departure_date,
        extra=extra,
    )


@pytest.fixture
def today() -> datetime:
    return datetime(2024, 1, 10, 15, 30)
