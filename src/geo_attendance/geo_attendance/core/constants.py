"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

EARTH_RADIUS_METERS = 6_371_000.0
DEFAULT_ON_TIME_DEADLINE = time(9, 0, 0)
DEFAULT_FACE_SERVICE_TIMEOUT = 90.0
MIN_FACE_SERVICE_TIMEOUT = 60.0
DEFAULT_HISTORY_LIMIT = 200
