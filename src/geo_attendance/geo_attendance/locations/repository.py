from __future__ import annotations

from typing import Protocol, Sequence

from ..geofence.model import GeoFenceZone


class ZoneDirectory(Protocol):
    """Resolves the geofence zones a user may check in from.

    Assignment is user -> department -> location; managing those links is a CRUD concern
    outside the attendance engine.
    """

    def zones_for_user(self, user_id: int) -> Sequence[GeoFenceZone]:
        raise NotImplementedError
