from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import AttendanceStatus
from ..geofence.model import GeoPoint


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    record_id: int
    user_id: int
    check_in_time: datetime
    status: AttendanceStatus
    check_out_time: Optional[datetime] = None
    location: Optional[GeoPoint] = None
    snapshot_ref: Optional[str] = None

    @property
    def work_date(self) -> date:
        return self.check_in_time.date()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.record_id,
            "userId": self.user_id,
            "workDate": self.work_date.isoformat(),
            "checkInTime": self.check_in_time.isoformat(),
            "checkOutTime": self.check_out_time.isoformat() if self.check_out_time else None,
            "status": self.status.value,
            "location": (
                {"latitude": self.location.latitude, "longitude": self.location.longitude}
                if self.location
                else None
            ),
            "snapshotRef": self.snapshot_ref,
        }
