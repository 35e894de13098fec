from __future__ import annotations

from datetime import datetime, time

from ...common.datetime_utils import deadline_for
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in strictly after the deadline."""

    def decide_checkin(self, *, now: datetime, deadline: time) -> StatusDecision:
        minutes = int((now - deadline_for(now, deadline)).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Late by {minutes} min")
