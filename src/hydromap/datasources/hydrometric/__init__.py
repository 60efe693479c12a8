"""Water Survey of Canada hydrometric data source (ECCC OGC API).

Resolves station numbers to locations and latest readings, tolerating
servers that ignore attribute filters: every operation tries a filtered
query first and falls back to an unfiltered query matched locally.

Public API:
  - client: HydrometricConfig, collection/field constants, fetch_items
  - stations: resolve_station_location, match_station
  - realtime: resolve_latest_observations, latest_per_parameter
  - models: StationLocation, Observation
"""

from hydromap.datasources.hydrometric.client import (
    DEFAULT_CONFIG,
    OGC_BASE,
    HydrometricConfig,
)
from hydromap.datasources.hydrometric.models import Observation, StationLocation
from hydromap.datasources.hydrometric.realtime import (
    filter_station_rows,
    latest_per_parameter,
    resolve_latest_observations,
)
from hydromap.datasources.hydrometric.stations import (
    location_from_feature,
    match_station,
    resolve_station_location,
)

__all__ = [
    "DEFAULT_CONFIG",
    "OGC_BASE",
    "HydrometricConfig",
    "Observation",
    "StationLocation",
    "filter_station_rows",
    "latest_per_parameter",
    "location_from_feature",
    "match_station",
    "resolve_latest_observations",
    "resolve_station_location",
]
