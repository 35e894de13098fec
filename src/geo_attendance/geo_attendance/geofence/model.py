from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_latitude, require_longitude
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 position in decimal degrees."""

    latitude: float
    longitude: float

    @classmethod
    def from_raw(cls, latitude, longitude) -> "GeoPoint":
        return cls(latitude=require_latitude(latitude), longitude=require_longitude(longitude))


@dataclass(frozen=True)
class GeoFenceZone:
    """Circular zone (office / branch) where check-in is allowed.

    Zones are reference data owned by location management; the attendance engine only
    reads them.
    """

    name: str
    center_latitude: float
    center_longitude: float
    radius_meters: float
    zone_id: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.radius_meters > 0:
            raise ValidationError(f"Zone {self.name!r} must have a positive radius")

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.center_latitude, self.center_longitude)
