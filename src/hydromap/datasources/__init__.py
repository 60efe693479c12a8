"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, the raw query
    ├── models.py         # Dataclasses for normalized records (optional)
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Sources
-------
- ``hydrometric/``  ECCC OGC API: station locations and real-time readings
- ``arcgis/``       ArcGIS FeatureServer layers clipped to the region bbox

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above.
   See ``arcgis/`` for a minimal example, ``hydrometric/`` for a richer one.

2. Write fetch functions that return dicts or dataclasses and raise a
   ``hydromap.errors.HydromapError`` subclass on failure::

       from hydromap.services.http import session

       def fetch_something(bbox) -> dict[str, Any]:
           resp = session.get(API_URL, params={...})
           ...

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Wire into the pipeline (see ``flows/fetch.py``): add a ``@task`` that
   catches ``HydromapError`` and records it in the diagnostics.

5. Add tests in ``tests/test_{name}.py``.
"""
