"""Popup HTML for a hydrometric station marker."""

from __future__ import annotations

from typing import Any

from hydromap.renderers import render_template
from hydromap.renderers.date_utils import format_timestamp

SOURCE_NOTE = "Source: ECCC OGC (hydrometric-stations / hydrometric-realtime)"


def _format_value(obs: dict[str, Any]) -> str:
    value = obs.get("value")
    unit = obs.get("unit")
    if value is None:
        text = ""
    elif isinstance(value, float):
        text = f"{value:g}"
    else:
        text = str(value)
    return f"{text} {unit}".strip() if unit else text


def build_station_popup_html(
    station_id: str,
    location: dict[str, Any] | None,
    observations: list[dict[str, Any]],
) -> str:
    """Build the popup for one station: name plus a latest-readings table.

    ``observations`` are ``Observation.to_dict()`` rows; an empty list
    renders "No recent values".
    """
    rows = [
        {
            "parameter": obs.get("parameter", ""),
            "value": _format_value(obs),
            "time": format_timestamp(obs.get("timestamp")),
        }
        for obs in observations
    ]
    return render_template(
        "station_popup.html.j2",
        station_id=station_id,
        name=(location or {}).get("name"),
        rows=rows,
        source=SOURCE_NOTE,
    )
