"""Exceptions raised by the hydromap data clients.

Every error is terminal for the single operation that raised it. Callers
that render many stations or layers catch ``HydromapError`` per item.
"""

from __future__ import annotations


class HydromapError(Exception):
    """Base class for hydromap failures."""


class TransportError(HydromapError):
    """HTTP request failed: network error, non-2xx status, or unusable body."""

    def __init__(
        self,
        url: str,
        status: int | None = None,
        station_id: str | None = None,
        reason: str = "",
    ) -> None:
        self.url = url
        self.status = status
        self.station_id = station_id
        self.reason = reason
        parts = [f"request to {url} failed"]
        if station_id is not None:
            parts.append(f"station {station_id}")
        if status is not None:
            parts.append(f"HTTP {status}")
        if reason:
            parts.append(reason)
        super().__init__(": ".join(parts))


class NoGeometryError(HydromapError):
    """Matched station feature has no usable [lon, lat] point."""

    def __init__(self, station_id: str) -> None:
        self.station_id = station_id
        super().__init__(f"No geometry for station {station_id}")


class StationNotFoundError(HydromapError):
    """Requested station is absent from the bulk result set."""

    def __init__(self, station_id: str) -> None:
        self.station_id = station_id
        super().__init__(f"Station {station_id} not found")


class LayerFetchError(HydromapError):
    """Feature layer query failed."""

    def __init__(self, endpoint: str, status: int | None = None, reason: str = "") -> None:
        self.endpoint = endpoint
        self.status = status
        self.reason = reason
        detail = f"HTTP {status}" if status is not None else "no response"
        if reason:
            detail = f"{detail} ({reason})"
        super().__init__(f"Feature layer {endpoint}: {detail}")
