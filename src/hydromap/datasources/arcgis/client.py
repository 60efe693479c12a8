"""ArcGIS FeatureServer layer queries.

API docs: https://developers.arcgis.com/rest/services-reference/enterprise/query-feature-service-layer/

The server does the spatial work: it intersects the layer with the region
envelope, reprojects to WGS84 and returns GeoJSON. The response is relayed
as-is.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import requests

from hydromap.errors import LayerFetchError
from hydromap.services.http import session

if TYPE_CHECKING:
    from hydromap.schemas import BoundingBox

WGS84 = "4326"


def query_url(endpoint: str) -> str:
    return f"{endpoint.rstrip('/')}/query"


def query_params(bbox: BoundingBox) -> dict[str, str]:
    """Envelope-intersects query returning every field as WGS84 GeoJSON."""
    return {
        "where": "1=1",
        "outFields": "*",
        "geometry": bbox.as_envelope(),
        "geometryType": "esriGeometryEnvelope",
        "inSR": WGS84,
        "spatialRel": "esriSpatialRelIntersects",
        "outSR": WGS84,
        "f": "geojson",
    }


def layer_display_name(endpoint: str) -> str:
    """Short overlay name: the last three path segments, e.g. ``Dams/FeatureServer/0``."""
    path = urlsplit(endpoint).path.rstrip("/")
    segments = [s for s in path.split("/") if s]
    return "/".join(segments[-3:]) if segments else endpoint


def fetch_feature_layer(
    endpoint: str,
    bbox: BoundingBox,
    *,
    http: requests.Session | None = None,
) -> dict[str, Any]:
    """
    Fetch the features of one FeatureServer layer that intersect ``bbox``.

    Args:
        endpoint: Layer URL, e.g. ``https://host/arcgis/rest/services/X/FeatureServer/0``.
        bbox: Region envelope in lon/lat degrees.
        http: Session override.

    Returns:
        The GeoJSON FeatureCollection exactly as the server sent it.

    Raises:
        LayerFetchError: Non-2xx status (with the status), network failure
            or non-JSON body (status None), or an ArcGIS error envelope
            (with the error code).
    """
    client = http or session
    try:
        resp = client.get(query_url(endpoint), params=query_params(bbox))
    except requests.RequestException as exc:
        raise LayerFetchError(endpoint, reason=str(exc)) from exc

    if not resp.ok:
        raise LayerFetchError(endpoint, resp.status_code)

    try:
        body: dict[str, Any] = resp.json()
    except ValueError as exc:
        raise LayerFetchError(endpoint, reason="invalid JSON") from exc

    # ArcGIS reports query errors with HTTP 200 and an "error" object
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        code = error.get("code")
        raise LayerFetchError(
            endpoint,
            code if isinstance(code, int) else None,
            reason=str(error.get("message", "")),
        )
    return body
