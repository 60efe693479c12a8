"""hydromap - near-real-time hydrometric readings on an interactive map.

Architecture::

    datasources/   External APIs (ECCC OGC hydrometric collections, ArcGIS FeatureServer)
    services/      Shared utilities (HTTP session, primary/fallback query combinator)
    renderers/     Pure data -> HTML (station popups, Leaflet map script)
    flows/         Prefect orchestration (fetch isolates failures, build renders site)
    reference/     Static defaults (region bbox, station list, map view)

Data flow: datasources -> flows/fetch (viewer data dict) -> renderers -> site/index.html

Nothing is cached between runs; every refresh queries the APIs again.
"""

__version__ = "0.1.0"

from hydromap.config import Settings, get_settings
from hydromap.schemas import BoundingBox

__all__ = ["BoundingBox", "Settings", "__version__", "get_settings"]
