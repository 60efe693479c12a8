"""
Prefect flow for building the static viewer page from fetched data.

Run locally (fetches first, nothing is cached between runs):
    python -m hydromap.flows.build
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prefect import flow, task

from hydromap.config import Settings, get_settings  # noqa: TC001 - flow parameter type
from hydromap.renderers import render_template
from hydromap.renderers.date_utils import updated_label
from hydromap.renderers.viewer_map import build_viewer_map_html

PAGE_TITLE = "Hydrometric Map Viewer"


@task(name="build-html")
def build_html(viewer_data: dict[str, Any], settings: Settings) -> str:
    """Build the full HTML page: map, overlays and diagnostics panel."""
    map_html, map_script = build_viewer_map_html(viewer_data, settings)
    return render_template(
        "base.html.j2",
        title=PAGE_TITLE,
        updated=updated_label(viewer_data.get("fetched_at")),
        map_html=map_html,
        map_script=map_script,
        diagnostics=viewer_data.get("diagnostics", []),
    )


@task(name="write-site")
def write_site(html: str, site_dir: Path) -> Path:
    """Write HTML to the site directory."""
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    with output_path.open("w", encoding="utf-8") as f:
        f.write(html)
    return output_path


@flow(name="build-site", log_prints=True)
def build_all(
    viewer_data: dict[str, Any] | None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """
    Render fetched viewer data into ``site_dir/index.html``.

    Returns ``{"error": "no data"}`` when there is nothing to render.
    """
    settings = settings or get_settings()

    if not viewer_data:
        print("No viewer data. Run the fetch flow first.")
        return {"error": "no data"}

    stations = [s for s in viewer_data.get("stations", []) if s.get("location")]
    layers = [lyr for lyr in viewer_data.get("layers", []) if lyr.get("feature_count", 0) > 0]
    if not stations:
        print("Warning: No stations located. Building map without station markers.")

    print("Building HTML...")
    html = build_html(viewer_data, settings)

    print("Writing site...")
    output_path = write_site(html, Path(settings.site_dir))

    print(f"Site built: {output_path}")
    return {
        "pages": 1,
        "output": str(output_path),
        "stations": len(stations),
        "layers": len(layers),
    }


if __name__ == "__main__":
    from hydromap.flows.fetch import fetch_all

    result = build_all(fetch_all())
    print(f"Flow complete: {result}")
