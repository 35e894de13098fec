"""Geofence evaluation.

Pure functions: great-circle distance with the haversine formula and zone lookup.
Inputs are degrees; distances are meters with no rounding before comparison.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from ..core.constants import EARTH_RADIUS_METERS
from .model import GeoFenceZone, GeoPoint


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(delta_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def is_within(point: GeoPoint, zone: GeoFenceZone) -> bool:
    return haversine_distance(point, zone.center) <= zone.radius_meters


def find_containing_zone(point: GeoPoint, zones: Iterable[GeoFenceZone]) -> Optional[GeoFenceZone]:
    """First zone (input order) containing ``point``; overlaps are not disambiguated."""
    for zone in zones:
        if is_within(point, zone):
            return zone
    return None
