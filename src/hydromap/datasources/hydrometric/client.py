"""ECCC OGC API client: URLs, field names, and the shared items query.

API docs: https://api.weather.gc.ca/openapi
Collections:
  - hydrometric-stations: one feature per station (point geometry + metadata)
  - hydrometric-realtime: recent readings, one feature per station/parameter/time
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

import requests

from hydromap.errors import TransportError
from hydromap.services.http import session

if TYPE_CHECKING:
    from collections.abc import Mapping

OGC_BASE = "https://api.weather.gc.ca/collections"

STATIONS_COLLECTION = "hydrometric-stations"
REALTIME_COLLECTION = "hydrometric-realtime"

# Feature property names
STATION_ID_FIELD = "STATION_NUMBER"
PARAMETER_FIELD = "PARAMETER"
VALUE_FIELD = "VALUE"
UNIT_FIELD = "UNIT"
DATE_FIELD = "DATE"

FilterStyle = Literal["property", "cql-text"]


@dataclass(frozen=True)
class HydrometricConfig:
    """Query settings passed explicitly to every station operation."""

    base_url: str = OGC_BASE
    station_limit: int = 1000
    realtime_limit: int = 5000
    filter_style: FilterStyle = "property"
    default_to_first_on_no_match: bool = True


DEFAULT_CONFIG = HydrometricConfig()


def items_url(base_url: str, collection: str) -> str:
    return f"{base_url.rstrip('/')}/{collection}/items"


def station_filter_params(station_id: str, style: FilterStyle) -> dict[str, str]:
    """Server-side attribute filter selecting one station.

    ``property`` uses the OGC API queryable-as-parameter form
    (``STATION_NUMBER=05JF003``); ``cql-text`` sends a CQL2 text filter.
    """
    if style == "cql-text":
        quoted = station_id.replace("'", "''")
        return {"filter": f"{STATION_ID_FIELD}='{quoted}'", "filter-lang": "cql-text"}
    return {STATION_ID_FIELD: station_id}


def station_id_of(feature_or_row: Mapping[str, Any]) -> str | None:
    """Station number of a feature or a flattened properties row, as a string."""
    props = feature_or_row.get("properties", feature_or_row)
    if not isinstance(props, dict) or props.get(STATION_ID_FIELD) is None:
        return None
    return str(props[STATION_ID_FIELD])


def fetch_items(
    collection: str,
    *,
    config: HydrometricConfig = DEFAULT_CONFIG,
    limit: int,
    station_id: str | None = None,
    filtered: bool = False,
    http: requests.Session | None = None,
) -> list[dict[str, Any]]:
    """Query a collection's ``/items`` and return its features.

    Args:
        collection: Collection name, e.g. ``hydrometric-realtime``.
        config: Base URL and filter style.
        limit: Maximum number of features requested.
        station_id: Station the query is for (used in errors and filters).
        filtered: Apply the server-side station filter.
        http: Session to use (defaults to the shared session).

    Returns:
        The ``features`` list of the GeoJSON response.

    Raises:
        TransportError: Network error, non-2xx status, non-JSON body, or a
            body without a ``features`` list.
    """
    url = items_url(config.base_url, collection)
    params: dict[str, str | int] = {"f": "json", "limit": limit}
    if filtered and station_id is not None:
        params.update(station_filter_params(station_id, config.filter_style))

    client = http or session
    try:
        resp = client.get(url, params=params)
    except requests.RequestException as exc:
        raise TransportError(url, station_id=station_id, reason=str(exc)) from exc

    if not resp.ok:
        raise TransportError(url, status=resp.status_code, station_id=station_id)

    try:
        body = resp.json()
    except ValueError as exc:
        raise TransportError(
            url, status=resp.status_code, station_id=station_id, reason="invalid JSON"
        ) from exc

    features = body.get("features") if isinstance(body, dict) else None
    if not isinstance(features, list):
        raise TransportError(
            url, status=resp.status_code, station_id=station_id, reason="no features list"
        )
    return [f for f in features if isinstance(f, dict)]
