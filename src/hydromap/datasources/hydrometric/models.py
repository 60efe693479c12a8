"""Station and observation records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from hydromap.datasources.hydrometric.client import (
    DATE_FIELD,
    PARAMETER_FIELD,
    STATION_ID_FIELD,
    UNIT_FIELD,
    VALUE_FIELD,
)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp. Returns None when missing or malformed.

    Naive timestamps are taken as UTC so every result is comparable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        dt = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


@dataclass(frozen=True)
class StationLocation:
    """Where a station is, plus every attribute the API reported for it."""

    station_id: str
    latitude: float
    longitude: float
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str | None:
        return self.attributes.get("STATION_NAME") or self.attributes.get("NAME")

    def to_dict(self) -> dict[str, Any]:
        return {
            "station_id": self.station_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "name": self.name,
            "attributes": dict(self.attributes),
        }


@dataclass(frozen=True)
class Observation:
    """Latest value of one parameter at one station."""

    parameter: str
    value: float | None
    unit: str | None
    timestamp: datetime | None
    station_id: str
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: dict[str, Any], station_id: str) -> Observation:
        """Normalize a raw ``hydrometric-realtime`` properties row."""
        raw_value = row.get(VALUE_FIELD)
        value: float | None
        try:
            value = float(raw_value) if raw_value is not None else None
        except (TypeError, ValueError):
            value = None

        unit = row.get(UNIT_FIELD)
        parameter = row.get(PARAMETER_FIELD)
        raw_station = row.get(STATION_ID_FIELD)
        return cls(
            parameter=str(parameter) if parameter is not None else "",
            value=value,
            unit=str(unit) if unit is not None else None,
            timestamp=parse_timestamp(row.get(DATE_FIELD)),
            station_id=str(raw_station) if raw_station is not None else station_id,
            properties=dict(row),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "parameter": self.parameter,
            "value": self.value,
            "unit": self.unit,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "station_id": self.station_id,
            "properties": dict(self.properties),
        }
