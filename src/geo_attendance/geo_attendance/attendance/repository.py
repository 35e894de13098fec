from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..geofence.model import GeoPoint
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Record store for attendance events, keyed by (user, calendar day).

    Implementations must enforce uniqueness of (user_id, day of check_in_time) on insert
    and raise ``DuplicateKeyError`` when it is violated.
    """

    def find_today_record(self, user_id: int, now: datetime) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert_check_in(
        self,
        *,
        user_id: int,
        check_in_time: datetime,
        status: AttendanceStatus,
        location: Optional[GeoPoint] = None,
        snapshot_ref: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update_check_out(
        self,
        *,
        record_id: int,
        check_out_time: datetime,
        snapshot_ref: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        """Set check-out once; ``snapshot_ref=None`` keeps the check-in snapshot.

        Returns ``None`` when no open record matched (unknown id or already checked out).
        """

        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self, *, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def delete_by_id(self, record_id: int) -> bool:
        """Admin-only removal; the engine itself never deletes records."""

        raise NotImplementedError
