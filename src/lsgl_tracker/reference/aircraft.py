"""Aircraft lookup by ICAO24 transponder address."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional


@dataclass(frozen=True)
class AircraftMetadataRecord:
    """Aircraft registry row."""

    icao24: Optional[str]
    fields: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)


def _normalize(icao24) -> str:
    if icao24 is None:
        return ""
    return str(icao24).strip().lower()


class AircraftIndex:
    """Lowercase-keyed index over aircraft rows. The earliest duplicate wins."""

    def __init__(self, records: Iterable[AircraftMetadataRecord] = ()):
        self._by_icao24: Dict[str, AircraftMetadataRecord] = {}
        for record in records:
            key = _normalize(record.icao24)
            if key:
                self._by_icao24.setdefault(key, record)

    def __len__(self) -> int:
        return len(self._by_icao24)

    def resolve(self, icao24: Optional[str]) -> Optional[AircraftMetadataRecord]:
        """Look up aircraft by ICAO24. Returns None if not found."""
        key = _normalize(icao24)
        if not key:
            return None
        return self._by_icao24.get(key)
