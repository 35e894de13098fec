from __future__ import annotations

from datetime import datetime, time


def parse_clock_time(value: str) -> time:
    """Parse 'HH:MM' or 'HH:MM:SS' into a time of day."""
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value.strip(), fmt).time()


def day_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Inclusive [start, end] of the calendar day containing ``now``."""
    day = now.date()
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def deadline_for(now: datetime, deadline: time) -> datetime:
    return datetime.combine(now.date(), deadline)
