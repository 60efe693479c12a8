"""Station location lookup (``hydrometric-stations`` collection)."""

from __future__ import annotations

from numbers import Real
from typing import TYPE_CHECKING, Any

from hydromap.datasources.hydrometric.client import (
    DEFAULT_CONFIG,
    STATIONS_COLLECTION,
    HydrometricConfig,
    fetch_items,
    station_id_of,
)
from hydromap.datasources.hydrometric.models import StationLocation
from hydromap.errors import NoGeometryError, StationNotFoundError
from hydromap.services.fallback import query_with_fallback

if TYPE_CHECKING:
    import requests

    from hydromap.diagnostics import DiagnosticLog


def first_feature_matches(features: list[dict[str, Any]], station_id: str) -> bool:
    """True if the first feature is the requested station (filter honoured)."""
    return bool(features) and station_id_of(features[0]) == station_id


def match_station(
    features: list[dict[str, Any]],
    station_id: str,
    *,
    default_to_first: bool = True,
    diagnostics: DiagnosticLog | None = None,
) -> dict[str, Any]:
    """Pick the feature for ``station_id`` out of an unfiltered result set.

    Args:
        features: Bulk query result.
        station_id: Requested station number (exact string match).
        default_to_first: When nothing matches, return the first feature
            instead of raising.
        diagnostics: Receives a warning when the first-feature default is used.

    Raises:
        NoGeometryError: The result set is empty, so there is no feature to
            take a point from.
        StationNotFoundError: No match and the first-feature default is off.
    """
    if not features:
        raise NoGeometryError(station_id)

    for feature in features:
        if station_id_of(feature) == station_id:
            return feature

    if not default_to_first:
        raise StationNotFoundError(station_id)

    chosen = features[0]
    if diagnostics is not None:
        diagnostics.warning(
            f"station {station_id} not in bulk result; "
            f"using first station {station_id_of(chosen) or '(unnamed)'}"
        )
    return chosen


def _point_coordinates(feature: dict[str, Any]) -> tuple[float, float] | None:
    """(lon, lat) of a point geometry, or None if unusable."""
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        return None
    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) != 2:
        return None
    lon, lat = coords
    if isinstance(lon, bool) or isinstance(lat, bool):
        return None
    if not isinstance(lon, Real) or not isinstance(lat, Real):
        return None
    return float(lon), float(lat)


def location_from_feature(feature: dict[str, Any], station_id: str) -> StationLocation:
    """Convert a GeoJSON station feature to a ``StationLocation``.

    GeoJSON stores ``[lon, lat]``; the record holds them by name.

    Raises:
        NoGeometryError: Geometry missing, not a pair, or not numeric.
    """
    point = _point_coordinates(feature)
    if point is None:
        raise NoGeometryError(station_id)
    lon, lat = point
    props = feature.get("properties")
    attributes = dict(props) if isinstance(props, dict) else {}
    return StationLocation(
        station_id=station_id,
        latitude=lat,
        longitude=lon,
        attributes=attributes,
    )


def resolve_station_location(
    station_id: str,
    *,
    config: HydrometricConfig = DEFAULT_CONFIG,
    diagnostics: DiagnosticLog | None = None,
    http: requests.Session | None = None,
) -> StationLocation:
    """
    Look up a station's coordinates and metadata.

    Tries a server-side filtered query (limit 1). If that fails or returns
    some other station, fetches up to ``config.station_limit`` stations and
    matches locally.

    Args:
        station_id: Water Survey of Canada station number, e.g. ``05JF003``.
        config: Query settings.
        diagnostics: Sink for fallback warnings.
        http: Session override (tests, custom timeouts).

    Returns:
        StationLocation with lat/lon and all feature properties.

    Raises:
        TransportError: The fallback query failed.
        StationNotFoundError: No match and the first-feature default is off.
        NoGeometryError: No station feature at all, or the chosen feature
            has no usable point.
    """
    station_id = str(station_id)

    def primary() -> list[dict[str, Any]]:
        return fetch_items(
            STATIONS_COLLECTION,
            config=config,
            limit=1,
            station_id=station_id,
            filtered=True,
            http=http,
        )

    def fallback() -> list[dict[str, Any]]:
        features = fetch_items(
            STATIONS_COLLECTION,
            config=config,
            limit=config.station_limit,
            station_id=station_id,
            http=http,
        )
        return [
            match_station(
                features,
                station_id,
                default_to_first=config.default_to_first_on_no_match,
                diagnostics=diagnostics,
            )
        ]

    features = query_with_fallback(
        primary,
        fallback,
        accept=lambda result: first_feature_matches(result, station_id),
        label=f"station meta {station_id}",
        diagnostics=diagnostics,
    )
    return location_from_feature(features[0], station_id)
