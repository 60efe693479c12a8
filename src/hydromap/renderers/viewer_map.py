"""Leaflet map renderer for stations and feature layers.

Station markers carry prebuilt popup HTML; feature layers are embedded as
GeoJSON and styled in the browser by geometry kind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hydromap.renderers import render_template
from hydromap.renderers.station_popup import build_station_popup_html

if TYPE_CHECKING:
    from hydromap.config import Settings

# Leaflet path options per geometry kind
GEOMETRY_STYLES: dict[str, dict[str, Any]] = {
    "point": {
        "radius": 6,
        "color": "#333",
        "weight": 1,
        "fillColor": "#2E86AB",
        "fillOpacity": 0.85,
    },
    "line": {"weight": 2},
    "polygon": {"weight": 1, "fillOpacity": 0.15},
}

BBOX_STYLE = {"color": "#d33", "weight": 1, "fillOpacity": 0.03}

# Feature popups list at most this many properties
MAX_POPUP_PROPERTIES = 20


def geometry_kind(geometry_type: str | None) -> str:
    """Map a GeoJSON geometry type to ``point``, ``line``, ``polygon`` or ``""``."""
    t = (geometry_type or "").lower()
    if "line" in t:
        return "line"
    if "polygon" in t:
        return "polygon"
    if "point" in t:
        return "point"
    return ""


def geometry_style(geometry_type: str | None) -> dict[str, Any]:
    """Leaflet style for a GeoJSON geometry type (empty dict = Leaflet default)."""
    return dict(GEOMETRY_STYLES.get(geometry_kind(geometry_type), {}))


def _station_markers(stations: list[dict[str, Any]]) -> list[dict[str, Any]]:
    markers: list[dict[str, Any]] = []
    for station in stations:
        location = station.get("location")
        if not location:
            continue
        station_id = station.get("station_id", "")
        markers.append(
            {
                "lat": location["latitude"],
                "lon": location["longitude"],
                "title": f"WSC {station_id}",
                "popup": build_station_popup_html(
                    station_id, location, station.get("observations") or []
                ),
            }
        )
    return markers


def _overlay_layers(layers: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [
        {"name": layer.get("name", ""), "geojson": layer["geojson"]}
        for layer in layers
        if layer.get("geojson") and layer.get("feature_count", 0) > 0
    ]


def build_viewer_map_html(
    viewer_data: dict[str, Any],
    settings: Settings,
) -> tuple[str, str]:
    """Build the interactive Leaflet map for stations and feature layers.

    Args:
        viewer_data: Output of the fetch flow (``stations``, ``layers``).
        settings: Supplies the region bbox and initial zoom.

    Returns a (map_div_html, map_script_js) tuple.
    """
    bbox = settings.bounding_box
    markers = _station_markers(viewer_data.get("stations", []))
    overlays = _overlay_layers(viewer_data.get("layers", []))

    map_div = render_template(
        "viewer_map.html.j2",
        station_count=len(markers),
        layer_count=len(overlays),
    )
    map_script = render_template(
        "viewer_map_script.html.j2",
        center=list(bbox.center),
        zoom=settings.map_zoom,
        bounds=bbox.leaflet_bounds(),
        bbox_style=BBOX_STYLE,
        markers=markers,
        overlays=overlays,
        styles=GEOMETRY_STYLES,
        max_popup_properties=MAX_POPUP_PROPERTIES,
    )
    return (map_div, map_script)
