"""ArcGIS FeatureServer data source.

Fetches vector layers (monitoring stations, dams, reservoirs, floodways)
clipped server-side to the region bounding box, as GeoJSON.

Public API:
  - client: fetch_feature_layer, layer_display_name, query_params
"""

from hydromap.datasources.arcgis.client import (
    fetch_feature_layer,
    layer_display_name,
    query_params,
)

__all__ = [
    "fetch_feature_layer",
    "layer_display_name",
    "query_params",
]
