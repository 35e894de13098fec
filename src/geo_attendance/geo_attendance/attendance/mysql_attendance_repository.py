from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import day_bounds
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..geofence.model import GeoPoint
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, user_id, check_in_time, check_out_time, status, latitude, longitude, snapshot_ref"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=int(r["user_id"]),
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        location=location,
        snapshot_ref=r.get("snapshot_ref"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Record store on MySQL.

    ``uq_attendance_user_day`` makes the duplicate check and the insert atomic; the
    violation surfaces as ``DuplicateKeyError`` from ``db_cursor``.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_today_record(self, user_id: int, now: datetime) -> Optional[AttendanceRecord]:
        start, end = day_bounds(now)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND check_in_time BETWEEN %s AND %s
                ORDER BY check_in_time
                LIMIT 1
                """,
                (user_id, start, end),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def insert_check_in(
        self,
        *,
        user_id: int,
        check_in_time: datetime,
        status: AttendanceStatus,
        location: Optional[GeoPoint] = None,
        snapshot_ref: Optional[str] = None,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, work_date, check_in_time, status, latitude, longitude, snapshot_ref)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    check_in_time.date(),
                    check_in_time,
                    status.value,
                    location.latitude if location else None,
                    location.longitude if location else None,
                    snapshot_ref,
                ),
            )
            return AttendanceRecord(
                record_id=int(cur.lastrowid),
                user_id=user_id,
                check_in_time=check_in_time,
                status=status,
                location=location,
                snapshot_ref=snapshot_ref,
            )

    def update_check_out(
        self,
        *,
        record_id: int,
        check_out_time: datetime,
        snapshot_ref: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Guarded by check_out_time IS NULL so a racing second check-out updates nothing.
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, snapshot_ref=COALESCE(%s, snapshot_ref)
                WHERE record_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, snapshot_ref, int(record_id)),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_all(self, *, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                ORDER BY check_in_time DESC, record_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def delete_by_id(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0
