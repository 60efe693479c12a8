"""
Shared HTTP session for the OGC and ArcGIS clients.

Every request hydromap makes goes out once. The adapter mounted here has
retries switched off, so a timeout, refused connection or 5xx reaches the
caller on the first attempt. Recovery is a data-source decision, not a
transport one: the hydrometric client answers a failed filtered query with
a single unfiltered one (``services.fallback``), and the feature-layer
client simply reports the layer as failed.

Status handling is also left to the callers. Both clients inspect
``resp.ok`` themselves and raise a ``HydromapError`` carrying the status,
so the adapter never raises on a status code.

Usage::

    from hydromap.services.http import create_session

    http = create_session(timeout=settings.http_timeout)
    resolve_station_location("05JF003", http=http)
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: Single attempt per request; statuses are returned, never raised.
NO_RETRY = Retry(
    total=0,
    raise_on_status=False,
)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "hydromap/0.1 (hydrometric map viewer)"

# OGC API Features serves GeoJSON under its own media type
ACCEPT = "application/geo+json, application/json"


def _apply_default_timeout(s: requests.Session, timeout: float) -> None:
    """Make ``timeout`` the fallback for any request sent without one."""
    send = s.send

    def send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = send_with_timeout  # type: ignore[method-assign]


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build the session used by the data clients.

    The fetch flow builds one per run with ``Settings.http_timeout``; the
    module-level ``session`` below serves direct library calls.

    Args:
        retry: Adapter retry policy. Defaults to ``NO_RETRY``; anything else
            is for ad-hoc use outside the pipeline.
        timeout: Seconds allowed per request unless the call passes its own.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    for prefix in ("https://", "http://"):
        s.mount(prefix, adapter)
    s.headers.update({"User-Agent": USER_AGENT, "Accept": ACCEPT})
    _apply_default_timeout(s, timeout)
    return s


#: Shared session with the default timeout.
session: requests.Session = create_session()
