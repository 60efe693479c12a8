"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: dicts from the fetch flow's viewer data
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py which orchestrates the rendering pipeline.

Public API:
  - station_popup: build_station_popup_html
  - viewer_map: build_viewer_map_html, geometry_style
  - date_utils: format_timestamp, updated_label

Adding a renderer
-----------------
1. Create ``renderers/{name}.py`` with a build function that calls
   ``render_template("{name}.html.j2", ...)``.
2. Create the Jinja2 template in ``templates/``. Templates produce HTML
   fragments; page-level CSS lives in ``templates/base.html.j2``.
3. Wire into ``flows/build.py`` and pass the fragment to ``base.html.j2``.
4. Add tests asserting the returned HTML contains the expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
