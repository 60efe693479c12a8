"""
Prefect flow for fetching station readings and feature layers.

Each station and each layer is fetched independently: a failure is recorded
in the diagnostics and the item is left out, the rest still render.

Run locally:
    python -m hydromap.flows.fetch

Run with Prefect dashboard:
    prefect server start &
    python -m hydromap.flows.fetch
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from hydromap.config import Settings, get_settings  # noqa: TC001 - flow parameter type
from hydromap.datasources import arcgis, hydrometric
from hydromap.diagnostics import DiagnosticLog
from hydromap.errors import HydromapError
from hydromap.services.http import create_session

if TYPE_CHECKING:
    import requests

    from hydromap.datasources.hydrometric import HydrometricConfig
    from hydromap.schemas import BoundingBox


@task(name="fetch-station", cache_policy=NO_CACHE)
def fetch_station(
    station_id: str,
    config: HydrometricConfig,
    diagnostics: DiagnosticLog,
    http: requests.Session | None = None,
) -> dict[str, Any]:
    """Resolve one station's location and latest readings.

    A location failure drops the station (``location`` is None). A readings
    failure keeps the marker with no values.
    """
    result: dict[str, Any] = {
        "station_id": station_id,
        "location": None,
        "observations": [],
        "error": None,
    }

    diagnostics.info(f"Loading station {station_id} meta...")
    try:
        location = hydrometric.resolve_station_location(
            station_id, config=config, diagnostics=diagnostics, http=http
        )
    except HydromapError as exc:
        diagnostics.warning(f"station meta {station_id}: {exc}")
        result["error"] = str(exc)
        return result
    result["location"] = location.to_dict()

    diagnostics.info(f"Loading station {station_id} realtime...")
    try:
        observations = hydrometric.resolve_latest_observations(
            station_id, config=config, diagnostics=diagnostics, http=http
        )
    except HydromapError as exc:
        diagnostics.warning(f"realtime {station_id}: {exc}")
        result["error"] = str(exc)
        return result
    result["observations"] = [obs.to_dict() for obs in observations]
    return result


@task(name="fetch-layer", cache_policy=NO_CACHE)
def fetch_layer(
    endpoint: str,
    bbox: BoundingBox,
    diagnostics: DiagnosticLog,
    http: requests.Session | None = None,
) -> dict[str, Any]:
    """Fetch one FeatureServer layer clipped to the region."""
    result: dict[str, Any] = {
        "endpoint": endpoint,
        "name": arcgis.layer_display_name(endpoint),
        "geojson": None,
        "feature_count": 0,
        "error": None,
    }

    diagnostics.info(f"Loading layer: {endpoint}")
    try:
        geojson = arcgis.fetch_feature_layer(endpoint, bbox, http=http)
    except HydromapError as exc:
        diagnostics.warning(f"layer {endpoint}: {exc}")
        result["error"] = str(exc)
        return result

    features = geojson.get("features") if isinstance(geojson, dict) else None
    count = len(features) if isinstance(features, list) else 0
    if count == 0:
        diagnostics.warning(f"(no features) {endpoint}")
    result["geojson"] = geojson
    result["feature_count"] = count
    return result


@flow(name="fetch-data", log_prints=True)
def fetch_all(settings: Settings | None = None) -> dict[str, Any]:
    """
    Fetch every configured station and layer.

    Returns the viewer data consumed by the build flow: ``fetched_at``,
    ``bbox``, ``stations``, ``layers`` and ``diagnostics``.
    """
    settings = settings or get_settings()
    config = settings.hydrometric_config()
    bbox = settings.bounding_box
    http = create_session(timeout=settings.http_timeout)
    diagnostics = DiagnosticLog()

    print(f"Fetching {len(settings.stations)} station(s)...")
    stations = [fetch_station(sid, config, diagnostics, http) for sid in settings.stations]
    located = sum(1 for s in stations if s["location"])
    print(f"Located {located} of {len(stations)} station(s)")

    print(f"Fetching {len(settings.layers)} layer(s)...")
    layers = [fetch_layer(url, bbox, diagnostics, http) for url in settings.layers]

    diagnostics.info("Finished loading")
    return {
        "fetched_at": datetime.now(UTC).isoformat(),
        "bbox": bbox.as_list(),
        "stations": stations,
        "layers": layers,
        "diagnostics": list(diagnostics),
    }


if __name__ == "__main__":
    result = fetch_all()
    print(f"Flow complete: {len(result['stations'])} stations, {len(result['layers'])} layers")
