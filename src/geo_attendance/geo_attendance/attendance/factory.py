from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time

from ..common.datetime_utils import deadline_for
from ..core.constants import DEFAULT_ON_TIME_DEADLINE
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the status strategy from the on-time deadline."""

    deadline: time = field(default=DEFAULT_ON_TIME_DEADLINE)

    def for_checkin(self, *, now: datetime) -> AttendanceStrategy:
        if now > deadline_for(now, self.deadline):
            return LateStrategy()
        return OnTimeStrategy()
