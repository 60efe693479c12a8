"""
Domain models shared across hydromap.

Pydantic models for values that cross module boundaries and need
validation. Per-source records (station locations, observations) live with
their data source as dataclasses.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field, model_validator

# =============================================================================
# Geographic
# =============================================================================


class BoundingBox(BaseModel):
    """Axis-aligned lon/lat envelope in WGS84 degrees."""

    model_config = {"frozen": True}

    xmin: float = Field(..., ge=-180, le=180, description="West longitude")
    ymin: float = Field(..., ge=-90, le=90, description="South latitude")
    xmax: float = Field(..., ge=-180, le=180, description="East longitude")
    ymax: float = Field(..., ge=-90, le=90, description="North latitude")

    @model_validator(mode="after")
    def _check_order(self) -> BoundingBox:
        if self.xmin >= self.xmax:
            msg = f"xmin ({self.xmin}) must be less than xmax ({self.xmax})"
            raise ValueError(msg)
        if self.ymin >= self.ymax:
            msg = f"ymin ({self.ymin}) must be less than ymax ({self.ymax})"
            raise ValueError(msg)
        return self

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> BoundingBox:
        """Build from ``[xmin, ymin, xmax, ymax]``."""
        if len(values) != 4:
            msg = f"Bounding box needs 4 values, got {len(values)}"
            raise ValueError(msg)
        xmin, ymin, xmax, ymax = values
        return cls(xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax)

    def as_list(self) -> list[float]:
        return [self.xmin, self.ymin, self.xmax, self.ymax]

    def as_envelope(self) -> str:
        """Comma-joined ``xmin,ymin,xmax,ymax`` for ArcGIS envelope queries."""
        return ",".join(str(v) for v in self.as_list())

    def leaflet_bounds(self) -> list[list[float]]:
        """Leaflet ``[[south, west], [north, east]]`` (lat/lon order)."""
        return [[self.ymin, self.xmin], [self.ymax, self.xmax]]

    @property
    def center(self) -> tuple[float, float]:
        """(lat, lon) midpoint."""
        return ((self.ymin + self.ymax) / 2, (self.xmin + self.xmax) / 2)
