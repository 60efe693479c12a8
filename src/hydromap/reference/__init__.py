"""Static viewer defaults.

Reference data that doesn't change with API calls: the region bounding box,
the stations to plot, and display settings.

Adding a new module:
1. Create ``reference/{name}.py`` with constants
2. Re-export from this ``__init__.py``
"""

from hydromap.reference.region import DEFAULT_BBOX as DEFAULT_BBOX
from hydromap.reference.region import DEFAULT_MAP_ZOOM as DEFAULT_MAP_ZOOM
from hydromap.reference.region import DEFAULT_STATIONS as DEFAULT_STATIONS
from hydromap.reference.region import DISPLAY_TIMEZONE as DISPLAY_TIMEZONE
