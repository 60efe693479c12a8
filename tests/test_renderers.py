"""
Tests for the HTML renderers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from hydromap.config import Settings
from hydromap.renderers.date_utils import format_timestamp, updated_label
from hydromap.renderers.station_popup import SOURCE_NOTE, build_station_popup_html
from hydromap.renderers.viewer_map import (
    GEOMETRY_STYLES,
    build_viewer_map_html,
    geometry_kind,
    geometry_style,
)

LOCATION = {
    "station_id": "05JF003",
    "latitude": 50.445,
    "longitude": -104.617,
    "name": "Wascana Creek at Regina",
    "attributes": {},
}


def observation(parameter: str, value: float | None, unit: str | None, ts: str) -> dict[str, Any]:
    return {
        "parameter": parameter,
        "value": value,
        "unit": unit,
        "timestamp": ts,
        "station_id": "05JF003",
        "properties": {},
    }


class TestFormatTimestamp:
    """Local display times."""

    def test_converts_to_regina(self) -> None:
        assert format_timestamp("2024-01-01T12:00:00Z") == "2024-01-01 06:00"

    def test_offset_input(self) -> None:
        assert format_timestamp("2024-07-01T12:00:00+00:00") == "2024-07-01 06:00"

    def test_naive_is_utc(self) -> None:
        assert format_timestamp("2024-01-01T12:00:00") == "2024-01-01 06:00"

    def test_other_zone(self) -> None:
        assert format_timestamp("2024-01-01T12:00:00Z", tz="UTC") == "2024-01-01 12:00"

    def test_unparsable_passthrough(self) -> None:
        assert format_timestamp("yesterday") == "yesterday"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty(self, value: str | None) -> None:
        assert format_timestamp(value) == ""


class TestUpdatedLabel:
    """Header 'Updated' label."""

    def test_includes_zone(self) -> None:
        assert updated_label("2026-02-04T12:00:00+00:00") == "2026-02-04 06:00 CST"

    def test_missing(self) -> None:
        assert updated_label(None) == "unknown"


class TestStationPopup:
    """Station marker popup."""

    def test_readings_table(self) -> None:
        html = build_station_popup_html(
            "05JF003",
            LOCATION,
            [
                observation("Water level", 1.5, "m", "2024-01-01T12:00:00+00:00"),
                observation("Discharge", 3.25, "m3/s", "2024-01-01T11:55:00+00:00"),
            ],
        )
        assert "WSC 05JF003" in html
        assert "Wascana Creek at Regina" in html
        assert "<th>Param</th>" in html
        assert "Water level" in html
        assert "1.5 m" in html
        assert "3.25 m3/s" in html
        assert "2024-01-01 06:00" in html
        assert "No recent values" not in html
        assert SOURCE_NOTE in html

    def test_no_readings(self) -> None:
        html = build_station_popup_html("05JF003", LOCATION, [])
        assert "No recent values" in html
        assert "<table>" not in html

    def test_missing_value_and_unit(self) -> None:
        html = build_station_popup_html(
            "05JF003", None, [observation("Level", None, None, "2024-01-01T12:00:00+00:00")]
        )
        assert "Level" in html
        assert "None" not in html

    def test_escapes_attribute_text(self) -> None:
        location = {**LOCATION, "name": "<script>alert(1)</script>"}
        html = build_station_popup_html("05JF003", location, [])
        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestGeometryStyle:
    """Overlay styling by geometry kind."""

    @pytest.mark.parametrize(
        ("geometry_type", "kind"),
        [
            ("Point", "point"),
            ("MultiPoint", "point"),
            ("LineString", "line"),
            ("MultiLineString", "line"),
            ("Polygon", "polygon"),
            ("MultiPolygon", "polygon"),
            ("GeometryCollection", ""),
            (None, ""),
        ],
    )
    def test_geometry_kind(self, geometry_type: str | None, kind: str) -> None:
        assert geometry_kind(geometry_type) == kind

    def test_point_style(self) -> None:
        style = geometry_style("Point")
        assert style["radius"] == 6
        assert style["color"] == "#333"
        assert style["fillColor"] == "#2E86AB"
        assert style["fillOpacity"] == 0.85

    def test_line_style(self) -> None:
        assert geometry_style("LineString") == {"weight": 2}

    def test_polygon_style(self) -> None:
        assert geometry_style("MultiPolygon")["fillOpacity"] == 0.15

    def test_unknown_uses_leaflet_default(self) -> None:
        assert geometry_style("GeometryCollection") == {}

    def test_returns_copy(self) -> None:
        geometry_style("LineString")["weight"] = 99
        assert GEOMETRY_STYLES["line"]["weight"] == 2


class TestViewerMap:
    """Leaflet map fragment and script."""

    def viewer_data(self) -> dict[str, Any]:
        return {
            "fetched_at": datetime(2024, 1, 1, 12, tzinfo=UTC).isoformat(),
            "stations": [
                {
                    "station_id": "05JF003",
                    "location": LOCATION,
                    "observations": [
                        observation("Water level", 1.5, "m", "2024-01-01T12:00:00+00:00")
                    ],
                    "error": None,
                },
                {
                    "station_id": "05JF008",
                    "location": None,
                    "observations": [],
                    "error": "No geometry for station 05JF008",
                },
            ],
            "layers": [
                {
                    "endpoint": "https://host/arcgis/rest/services/Dams/FeatureServer/0",
                    "name": "Dams/FeatureServer/0",
                    "geojson": {
                        "type": "FeatureCollection",
                        "features": [
                            {
                                "type": "Feature",
                                "geometry": {"type": "Point", "coordinates": [-104.6, 50.4]},
                                "properties": {"NAME": "Dam 1"},
                            }
                        ],
                    },
                    "feature_count": 1,
                    "error": None,
                },
                {
                    "endpoint": "https://host/arcgis/rest/services/Empty/FeatureServer/3",
                    "name": "Empty/FeatureServer/3",
                    "geojson": {"type": "FeatureCollection", "features": []},
                    "feature_count": 0,
                    "error": None,
                },
            ],
            "diagnostics": [],
        }

    def test_returns_div_and_script(self) -> None:
        map_div, map_script = build_viewer_map_html(self.viewer_data(), Settings())
        assert 'id="map"' in map_div
        assert map_script.strip().startswith("<script>")

    def test_summary_counts(self) -> None:
        map_div, _ = build_viewer_map_html(self.viewer_data(), Settings())
        assert "1 station" in map_div
        assert "1 overlay layer" in map_div

    def test_only_located_stations_are_markers(self) -> None:
        _, map_script = build_viewer_map_html(self.viewer_data(), Settings())
        assert "WSC 05JF003" in map_script
        assert "WSC 05JF008" not in map_script
        assert "Hydrometric (latest)" in map_script

    def test_empty_layers_left_out(self) -> None:
        _, map_script = build_viewer_map_html(self.viewer_data(), Settings())
        assert "Dams/FeatureServer/0" in map_script
        assert "Empty/FeatureServer/3" not in map_script

    def test_region_bounds(self) -> None:
        _, map_script = build_viewer_map_html(self.viewer_data(), Settings())
        assert "[[50.2, -105.2], [50.8, -104.2]]" in map_script
        assert "L.rectangle" in map_script
        assert "#d33" in map_script

    def test_zoom_from_settings(self) -> None:
        _, map_script = build_viewer_map_html(self.viewer_data(), Settings(map_zoom=9))
        assert "zoom: 9" in map_script

    def test_no_data(self) -> None:
        map_div, map_script = build_viewer_map_html({}, Settings())
        assert "0 stations" in map_div
        assert "0 overlay layers" in map_div
        assert "L.map" in map_script
