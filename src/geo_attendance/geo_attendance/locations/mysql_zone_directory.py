from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..geofence.model import GeoFenceZone
from .repository import ZoneDirectory


class MySQLZoneDirectory(ZoneDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def zones_for_user(self, user_id: int) -> Sequence[GeoFenceZone]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT l.location_id, l.name, l.latitude, l.longitude, l.radius_meters
                FROM users u
                JOIN departments d ON d.dept_id = u.dept_id
                JOIN locations l ON l.location_id = d.location_id
                WHERE u.user_id=%s AND l.radius_meters > 0
                ORDER BY l.location_id
                """,
                (user_id,),
            )
            rows = fetchall(cur)
            return [
                GeoFenceZone(
                    zone_id=int(r["location_id"]),
                    name=r["name"],
                    center_latitude=float(r["latitude"]),
                    center_longitude=float(r["longitude"]),
                    radius_meters=float(r["radius_meters"]),
                )
                for r in rows
            ]
