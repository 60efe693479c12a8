"""Latest real-time readings per parameter (``hydrometric-realtime`` collection)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from hydromap.datasources.hydrometric.client import (
    DATE_FIELD,
    DEFAULT_CONFIG,
    PARAMETER_FIELD,
    REALTIME_COLLECTION,
    HydrometricConfig,
    fetch_items,
    station_id_of,
)
from hydromap.datasources.hydrometric.models import Observation, parse_timestamp
from hydromap.services.fallback import query_with_fallback

if TYPE_CHECKING:
    from collections.abc import Iterable

    import requests

    from hydromap.diagnostics import DiagnosticLog

# Rows whose timestamp is missing or unparsable rank below every valid one
_EARLIEST = datetime.min.replace(tzinfo=UTC)


def _sort_key(row: dict[str, Any]) -> tuple[int, datetime]:
    ts = parse_timestamp(row.get(DATE_FIELD))
    if ts is None:
        return (0, _EARLIEST)
    return (1, ts)


def latest_per_parameter(rows: Iterable[dict[str, Any]]) -> dict[Any, dict[str, Any]]:
    """Keep the most recent row for each ``PARAMETER``.

    A row replaces the kept one only when its timestamp is strictly later,
    so on ties the row seen first wins. Rows with a missing or unparsable
    ``DATE`` rank below every valid timestamp.
    """
    by_param: dict[Any, dict[str, Any]] = {}
    keys: dict[Any, tuple[int, datetime]] = {}
    for row in rows:
        param = row.get(PARAMETER_FIELD)
        key = _sort_key(row)
        if param not in by_param or key > keys[param]:
            by_param[param] = row
            keys[param] = key
    return by_param


def filter_station_rows(rows: list[dict[str, Any]], station_id: str) -> list[dict[str, Any]]:
    """Keep rows for ``station_id``.

    If the first row has no station number (absent or null) the server is not
    returning station-tagged rows, and every row is kept unchanged.
    """
    if not rows or station_id_of(rows[0]) is None:
        return rows
    return [row for row in rows if station_id_of(row) == station_id]


def _rows(features: list[dict[str, Any]]) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for feature in features:
        props = feature.get("properties")
        rows.append(props if isinstance(props, dict) else {})
    return rows


def resolve_latest_observations(
    station_id: str,
    *,
    config: HydrometricConfig = DEFAULT_CONFIG,
    diagnostics: DiagnosticLog | None = None,
    http: requests.Session | None = None,
) -> list[Observation]:
    """
    Fetch the latest reading of every parameter reported by a station.

    Tries a server-side filtered query first; if it fails or returns rows
    for another station, fetches unfiltered and filters locally. Then keeps
    the newest row per parameter. Rows for other stations are dropped
    whichever query answered.

    Args:
        station_id: Water Survey of Canada station number.
        config: Query settings (``realtime_limit`` caps rows per query).
        diagnostics: Sink for fallback and empty-result messages.
        http: Session override.

    Returns:
        One Observation per parameter, in first-seen order. Empty when the
        station has no recent rows.

    Raises:
        TransportError: The fallback query failed.
    """
    station_id = str(station_id)

    def primary() -> list[dict[str, Any]]:
        features = fetch_items(
            REALTIME_COLLECTION,
            config=config,
            limit=config.realtime_limit,
            station_id=station_id,
            filtered=True,
            http=http,
        )
        return _rows(features)

    def fallback() -> list[dict[str, Any]]:
        features = fetch_items(
            REALTIME_COLLECTION,
            config=config,
            limit=config.realtime_limit,
            station_id=station_id,
            http=http,
        )
        return filter_station_rows(_rows(features), station_id)

    rows = query_with_fallback(
        primary,
        fallback,
        accept=lambda result: bool(result) and station_id_of(result[0]) == station_id,
        label=f"realtime {station_id}",
        diagnostics=diagnostics,
    )
    # An ignored filter can still put the requested station first
    rows = filter_station_rows(rows, station_id)

    if not rows:
        if diagnostics is not None:
            diagnostics.warning(f"realtime {station_id}: no rows returned")
        return []

    latest = latest_per_parameter(rows)
    return [Observation.from_row(row, station_id) for row in latest.values()]
