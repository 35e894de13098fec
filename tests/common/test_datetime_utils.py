from datetime import datetime, time

import pytest

from src.geo_attendance.geo_attendance.common.clock import FixedClock, SystemClock
from src.geo_attendance.geo_attendance.common.datetime_utils import day_bounds, parse_clock_time


def test_day_bounds_cover_whole_day():
    start, end = day_bounds(datetime(2026, 2, 2, 13, 45))
    assert start == datetime(2026, 2, 2, 0, 0, 0)
    assert end == datetime(2026, 2, 2, 23, 59, 59, 999999)


@pytest.mark.parametrize("value, expected", [("09:00", time(9, 0)), ("08:30:15", time(8, 30, 15)), (" 10:05 ", time(10, 5))])
def test_parse_clock_time(value, expected):
    assert parse_clock_time(value) == expected


def test_fixed_clock_advance():
    clock = FixedClock(datetime(2026, 2, 2, 8, 0))
    assert clock.advance(minutes=90) == datetime(2026, 2, 2, 9, 30)
    assert clock.now() == datetime(2026, 2, 2, 9, 30)


def test_system_clock_has_whole_second_precision():
    assert SystemClock().now().microsecond == 0
