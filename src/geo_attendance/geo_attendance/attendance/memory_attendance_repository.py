from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateKeyError
from ..geofence.model import GeoPoint
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local record store used by tests and demos.

    The lock stands in for the database's unique key: the existence check and the
    insert happen atomically.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._records: dict[int, AttendanceRecord] = {}
        self._by_user_day: dict[tuple[int, date], int] = {}
        self._ids = itertools.count(1)

    def find_today_record(self, user_id: int, now: datetime) -> Optional[AttendanceRecord]:
        start, end = day_bounds(now)
        with self._lock:
            for record in self._records.values():
                if record.user_id == user_id and start <= record.check_in_time <= end:
                    return record
        return None

    def insert_check_in(
        self,
        *,
        user_id: int,
        check_in_time: datetime,
        status: AttendanceStatus,
        location: Optional[GeoPoint] = None,
        snapshot_ref: Optional[str] = None,
    ) -> AttendanceRecord:
        key = (user_id, check_in_time.date())
        with self._lock:
            if key in self._by_user_day:
                raise DuplicateKeyError(f"Attendance for user {user_id} on {key[1]} already exists")
            record = AttendanceRecord(
                record_id=next(self._ids),
                user_id=user_id,
                check_in_time=check_in_time,
                status=status,
                location=location,
                snapshot_ref=snapshot_ref,
            )
            self._records[record.record_id] = record
            self._by_user_day[key] = record.record_id
            return record

    def update_check_out(
        self,
        *,
        record_id: int,
        check_out_time: datetime,
        snapshot_ref: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        with self._lock:
            current = self._records.get(record_id)
            if current is None or current.check_out_time is not None:
                return None
            updated = replace(
                current,
                check_out_time=check_out_time,
                snapshot_ref=snapshot_ref or current.snapshot_ref,
            )
            self._records[record_id] = updated
            return updated

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._records.get(record_id)

    def list_all(self, *, limit: int) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = sorted(self._records.values(), key=lambda r: (r.check_in_time, r.record_id), reverse=True)
        return items[: int(limit)]

    def delete_by_id(self, record_id: int) -> bool:
        with self._lock:
            record = self._records.pop(record_id, None)
            if record is None:
                return False
            self._by_user_day.pop((record.user_id, record.work_date), None)
            return True
