"""Airport lookup by ICAO code against loaded reference rows."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

# Columns that may carry the ICAO code, in lookup priority order
CODE_FIELDS = ("icao", "ICAO", "ident", "gps_code")


@dataclass(frozen=True)
class AirportMetadataRecord:
    """Airport reference row. The ICAO code may live under several column names."""

    fields: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)


@dataclass(frozen=True)
class AirportInfo:
    """Airport details for display."""

    name: str
    country: Optional[str] = None
    city: Optional[str] = None


def _normalize(code) -> str:
    if code is None:
        return ""
    return str(code).strip().upper()


def _first_str(record: AirportMetadataRecord, *keys: str) -> Optional[str]:
    for k in keys:
        v = record.get(k)
        if isinstance(v, str) and v.strip():
            return v.strip()
    return None


class AirportIndex:
    """Uppercase-keyed index over airport rows.

    Codes are registered one column at a time in priority order (`icao`,
    `ICAO`, `ident`, `gps_code`), so an `icao` match on a later row beats a
    `gps_code` match on an earlier one. Within a column the earliest row wins.
    """

    def __init__(self, records: Iterable[AirportMetadataRecord] = ()):
        self._by_code: Dict[str, AirportMetadataRecord] = {}
        records = list(records)
        for key in CODE_FIELDS:
            for record in records:
                value = record.get(key)
                if isinstance(value, str) and value.strip():
                    self._by_code.setdefault(_normalize(value), record)

    def __len__(self) -> int:
        return len(self._by_code)

    def resolve(self, icao: Optional[str]) -> Optional[AirportMetadataRecord]:
        """Look up an airport row by ICAO code. Returns None if not found."""
        key = _normalize(icao)
        if not key:
            return None
        return self._by_code.get(key)

    def info(self, icao: Optional[str]) -> Optional[AirportInfo]:
        """Return name, country and city for an airport code. Returns None if not found."""
        record = self.resolve(icao)
        if record is None:
            return None
        return AirportInfo(
            name=_first_str(record, "name") or icao,
            country=_first_str(record, "country", "iso_country"),
            city=_first_str(record, "city", "municipality"),
        )
