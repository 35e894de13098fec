from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Server-local wall clock (naive datetimes, one timezone system-wide)."""

    def now(self) -> datetime:
        # Whole seconds: the stored DATETIME must land on the same calendar day as work_date.
        return datetime.now().replace(microsecond=0)


@dataclass
class FixedClock:
    """Deterministic clock for tests and scripts."""

    current: datetime

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current
