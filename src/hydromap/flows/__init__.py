"""
Prefect flows for the viewer pipeline.

Flows:
- fetch: Query station locations, latest readings and feature layers
- build: Render the viewer data into a static Leaflet page

Usage (local):
    python -m hydromap.flows.build      # fetch + build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    hydromap refresh
"""
