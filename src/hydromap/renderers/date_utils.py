"""Shared date-formatting helpers for renderers."""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from hydromap.reference.region import DISPLAY_TIMEZONE


def format_timestamp(value: str | None, tz: str = DISPLAY_TIMEZONE) -> str:
    """Render an ISO timestamp as local ``YYYY-MM-DD HH:MM``.

    Naive values are read as UTC. Unparsable strings are returned as-is and
    ``None`` becomes an empty string.
    """
    if not value:
        return ""
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return value
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(ZoneInfo(tz)).strftime("%Y-%m-%d %H:%M")


def updated_label(fetched_at: str | None, tz: str = DISPLAY_TIMEZONE) -> str:
    """Header label for when the data was fetched, e.g. ``2026-02-04 06:00 CST``."""
    if not fetched_at:
        return "unknown"
    try:
        dt = datetime.fromisoformat(fetched_at)
    except ValueError:
        return fetched_at
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(ZoneInfo(tz)).strftime("%Y-%m-%d %H:%M %Z")
