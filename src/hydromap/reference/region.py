"""Default viewing region and stations (Regina / Lower Qu'Appelle)."""

from __future__ import annotations

# xmin, ymin, xmax, ymax (WGS84)
DEFAULT_BBOX: tuple[float, float, float, float] = (-105.20, 50.20, -104.20, 50.80)

# Water Survey of Canada stations: Wascana Creek at Regina, plus a nearby gauge
DEFAULT_STATIONS: tuple[str, ...] = ("05JF003", "05JF008")

DEFAULT_MAP_ZOOM = 11

# Saskatchewan does not observe DST
DISPLAY_TIMEZONE = "America/Regina"
