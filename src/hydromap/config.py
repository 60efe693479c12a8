"""
Application settings.

Values load once from ``HYDROMAP_*`` environment variables or a ``.env``
file, with defaults for the Regina region. Flows and clients receive the
settings (or a config derived from them) as an explicit argument; nothing
reads the cached instance behind their back.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hydromap.datasources.hydrometric.client import OGC_BASE, HydrometricConfig
from hydromap.reference.region import DEFAULT_BBOX, DEFAULT_MAP_ZOOM, DEFAULT_STATIONS
from hydromap.schemas import BoundingBox


class Settings(BaseSettings):
    """Viewer configuration: region, stations, layers and query limits."""

    model_config = SettingsConfigDict(
        env_prefix="HYDROMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------

    app_name: str = Field(default="hydromap", description="Name shown by the CLI")
    app_env: str = Field(default="local", description="Runtime environment (local, ci, prod)")
    debug: bool = Field(default=False, description="Verbose logging")
    api_port: int = Field(default=8000, description="Port for `hydromap serve`")
    site_dir: Path = Field(default=Path("site"), description="Where the page is written")

    # -------------------------------------------------------------------------
    # Map content
    # -------------------------------------------------------------------------

    bbox: list[float] = Field(
        default_factory=lambda: list(DEFAULT_BBOX),
        description="xmin, ymin, xmax, ymax in WGS84 degrees",
    )
    stations: list[str] = Field(
        default_factory=lambda: list(DEFAULT_STATIONS),
        description="Water Survey of Canada station numbers to plot",
    )
    layers: list[str] = Field(
        default_factory=list,
        description="ArcGIS FeatureServer layer URLs to overlay",
    )
    map_zoom: int = Field(default=DEFAULT_MAP_ZOOM, ge=1, le=19)

    # -------------------------------------------------------------------------
    # Hydrometric queries
    # -------------------------------------------------------------------------

    ogc_base_url: str = Field(default=OGC_BASE)
    station_limit: int = Field(default=1000, gt=0)
    realtime_limit: int = Field(default=5000, gt=0)
    filter_style: Literal["property", "cql-text"] = "property"
    default_to_first_on_no_match: bool = Field(
        default=True,
        description="Use the first station in a bulk result when the requested one is missing",
    )
    http_timeout: float = Field(default=30, gt=0, description="Per-request timeout (seconds)")

    @field_validator("bbox")
    @classmethod
    def _validate_bbox(cls, value: list[float]) -> list[float]:
        BoundingBox.from_sequence(value)
        return value

    @field_validator("layers")
    @classmethod
    def _drop_blank_layers(cls, value: list[str]) -> list[str]:
        return [url.strip() for url in value if url and url.strip()]

    @property
    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_sequence(self.bbox)

    def hydrometric_config(self) -> HydrometricConfig:
        """Query configuration for the station data client."""
        return HydrometricConfig(
            base_url=self.ogc_base_url,
            station_limit=self.station_limit,
            realtime_limit=self.realtime_limit,
            filter_style=self.filter_style,
            default_to_first_on_no_match=self.default_to_first_on_no_match,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded on first use."""
    return Settings()
