"""
Tests for the build flow module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hydromap.config import Settings
from hydromap.flows import build

if TYPE_CHECKING:
    from pathlib import Path


def viewer_data() -> dict[str, Any]:
    return {
        "fetched_at": "2026-02-04T12:00:00+00:00",
        "bbox": [-105.2, 50.2, -104.2, 50.8],
        "stations": [
            {
                "station_id": "05JF003",
                "location": {
                    "station_id": "05JF003",
                    "latitude": 50.445,
                    "longitude": -104.617,
                    "name": "Wascana Creek at Regina",
                    "attributes": {},
                },
                "observations": [
                    {
                        "parameter": "Water level",
                        "value": 1.5,
                        "unit": "m",
                        "timestamp": "2026-02-04T11:55:00+00:00",
                        "station_id": "05JF003",
                        "properties": {},
                    }
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
                "geojson": {"type": "FeatureCollection", "features": [{"type": "Feature"}]},
                "feature_count": 1,
                "error": None,
            }
        ],
        "diagnostics": [
            "Loading station 05JF003 meta...",
            "WARNING: station meta 05JF008: No geometry for station 05JF008",
            "Finished loading",
        ],
    }


class TestBuildHtml:
    """Full-page assembly."""

    def test_page_structure(self) -> None:
        html = build.build_html(viewer_data(), Settings())
        assert html.startswith("<!DOCTYPE html>")
        assert build.PAGE_TITLE in html
        assert "leaflet@1.9.4" in html
        assert 'id="map"' in html
        assert "Updated 2026-02-04 06:00 CST" in html

    def test_debug_panel(self) -> None:
        html = build.build_html(viewer_data(), Settings())
        assert '<pre id="debug">' in html
        assert "WARNING: station meta 05JF008: No geometry for station 05JF008" in html
        assert "Finished loading" in html

    def test_no_debug_panel_without_diagnostics(self) -> None:
        data = {**viewer_data(), "diagnostics": []}
        html = build.build_html(data, Settings())
        assert '<pre id="debug">' not in html

    def test_diagnostics_escaped(self) -> None:
        data = {**viewer_data(), "diagnostics": ["<img src=x onerror=alert(1)>"]}
        html = build.build_html(data, Settings())
        assert "<img src=x" not in html


class TestWriteSite:
    """Writing index.html."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        site_dir = tmp_path / "nested" / "site"
        output = build.write_site("<html></html>", site_dir)
        assert output == site_dir / "index.html"
        assert output.read_text(encoding="utf-8") == "<html></html>"

    def test_overwrites(self, tmp_path: Path) -> None:
        build.write_site("old", tmp_path)
        output = build.write_site("new", tmp_path)
        assert output.read_text(encoding="utf-8") == "new"


class TestBuildAll:
    """Full build flow."""

    def test_build_all(self, tmp_path: Path) -> None:
        settings = Settings(site_dir=tmp_path / "site")

        result = build.build_all(viewer_data(), settings=settings)

        assert result["pages"] == 1
        assert result["stations"] == 1
        assert result["layers"] == 1
        output = tmp_path / "site" / "index.html"
        assert result["output"] == str(output)
        html = output.read_text(encoding="utf-8")
        assert "Wascana Creek at Regina" in html
        assert "Dams/FeatureServer/0" in html

    def test_no_stations_located(self, tmp_path: Path) -> None:
        data = viewer_data()
        data["stations"] = [s for s in data["stations"] if s["location"] is None]
        data["layers"] = []

        result = build.build_all(data, settings=Settings(site_dir=tmp_path))

        assert result["stations"] == 0
        assert result["layers"] == 0
        assert (tmp_path / "index.html").exists()

    def test_no_data(self, tmp_path: Path) -> None:
        result = build.build_all(None, settings=Settings(site_dir=tmp_path))
        assert result == {"error": "no data"}
        assert not (tmp_path / "index.html").exists()
