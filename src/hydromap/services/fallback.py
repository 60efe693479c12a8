"""
Primary -> fallback query combinator.

Some OGC servers reject or silently ignore attribute filters. Both station
operations therefore try a filtered query first and, when that fails or
looks unfiltered, repeat the request without the filter and match locally.
This module holds the composition so the contract lives in one place:

- ``primary()`` raising ``HydromapError``     -> run ``fallback()``
- ``accept(primary())`` returning False        -> run ``fallback()``
- anything raised by ``fallback()``            -> propagates to the caller

There is exactly one fallback attempt and no delay between attempts.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from hydromap.errors import HydromapError

if TYPE_CHECKING:
    from hydromap.diagnostics import DiagnosticLog

T = TypeVar("T")


def query_with_fallback(
    primary: Callable[[], T],
    fallback: Callable[[], T],
    *,
    accept: Callable[[T], bool] | None = None,
    label: str = "query",
    diagnostics: DiagnosticLog | None = None,
) -> T:
    """Run ``primary``; on failure or rejection, return ``fallback()`` instead.

    Args:
        primary: Filtered query. May raise ``HydromapError``.
        fallback: Unfiltered query plus local matching.
        accept: Predicate on the primary result. ``None`` accepts anything
            the primary returns.
        label: Prefix for the diagnostic line, e.g. ``"station meta 05JF003"``.
        diagnostics: Sink for the "falling back" warning.

    Returns:
        The primary result if accepted, else the fallback result.
    """
    try:
        result = primary()
    except HydromapError as exc:
        reason = f"filtered query failed ({exc})"
    else:
        if accept is None or accept(result):
            return result
        reason = "filtered query did not return the requested station"

    if diagnostics is not None:
        diagnostics.warning(f"{label}: {reason}; retrying without filter")
    return fallback()
