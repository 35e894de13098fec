from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.geo_attendance.geo_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.geo_attendance.geo_attendance.core.enums import AttendanceStatus
from src.geo_attendance.geo_attendance.core.exceptions import DuplicateKeyError


def _insert(repo, user_id, at):
    return repo.insert_check_in(user_id=user_id, check_in_time=at, status=AttendanceStatus.PRESENT)


def test_day_bounds_are_inclusive():
    repo = InMemoryAttendanceRepository()
    midnight = datetime(2026, 3, 1, 0, 0, 0)
    _insert(repo, 1, midnight)

    assert repo.find_today_record(1, datetime(2026, 3, 1, 23, 59, 59, 999999)) is not None
    assert repo.find_today_record(1, datetime(2026, 2, 28, 23, 59, 59)) is None
    assert repo.find_today_record(2, midnight) is None


def test_insert_enforces_one_record_per_user_day():
    repo = InMemoryAttendanceRepository()
    _insert(repo, 1, datetime(2026, 3, 1, 8, 0))

    with pytest.raises(DuplicateKeyError):
        _insert(repo, 1, datetime(2026, 3, 1, 22, 0))

    _insert(repo, 1, datetime(2026, 3, 2, 8, 0))
    _insert(repo, 2, datetime(2026, 3, 1, 8, 0))


def test_update_check_out_sets_once():
    repo = InMemoryAttendanceRepository()
    rec = _insert(repo, 1, datetime(2026, 3, 1, 8, 0))

    updated = repo.update_check_out(record_id=rec.record_id, check_out_time=datetime(2026, 3, 1, 17, 0))
    assert updated.check_out_time == datetime(2026, 3, 1, 17, 0)

    again = repo.update_check_out(record_id=rec.record_id, check_out_time=datetime(2026, 3, 1, 18, 0))
    assert again is None
    assert repo.get_by_id(rec.record_id).check_out_time == datetime(2026, 3, 1, 17, 0)
    assert repo.update_check_out(record_id=999, check_out_time=datetime(2026, 3, 1, 18, 0)) is None


def test_list_all_newest_first_and_delete_frees_the_day():
    repo = InMemoryAttendanceRepository()
    start = datetime(2026, 3, 1, 8, 0)
    ids = [_insert(repo, 1, start + timedelta(days=i)).record_id for i in range(3)]

    assert [r.record_id for r in repo.list_all(limit=2)] == [ids[2], ids[1]]

    assert repo.delete_by_id(ids[0]) is True
    assert repo.delete_by_id(ids[0]) is False
    _insert(repo, 1, start.replace(hour=9))
