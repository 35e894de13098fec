from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import pytest

from src.geo_attendance.geo_attendance.attendance.factory import AttendanceStrategyFactory
from src.geo_attendance.geo_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.geo_attendance.geo_attendance.attendance.service import AttendanceService
from src.geo_attendance.geo_attendance.common.clock import FixedClock
from src.geo_attendance.geo_attendance.core.enums import Role
from src.geo_attendance.geo_attendance.enrollment.model import FaceSample, VerificationResult
from src.geo_attendance.geo_attendance.geofence.model import GeoFenceZone, GeoPoint
from src.geo_attendance.geo_attendance.users.model import Employee

ENROLLED_USER = 1
UNENROLLED_USER = 2
NO_ZONE_USER = 3
INACTIVE_USER = 4

OFFICE = GeoFenceZone(zone_id=1, name="Head Office", center_latitude=24.7136, center_longitude=46.6753, radius_meters=150)


@dataclass
class InMemoryUsers:
    users: dict[int, Employee]
    templates: dict[int, list[float]] = field(default_factory=dict)

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return self.users.get(user_id)

    def get_face_template(self, user_id: int):
        return self.templates.get(user_id)

    def set_face_template(self, user_id: int, template) -> bool:
        if user_id not in self.users:
            return False
        self.templates[user_id] = list(template)
        return True


@dataclass
class InMemoryZones:
    zones_by_user: dict[int, list[GeoFenceZone]]

    def zones_for_user(self, user_id: int):
        return list(self.zones_by_user.get(user_id, []))


class FakeGateway:
    """Enrollment gateway double: enrollment comes from the users fake, match is scripted."""

    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.is_match = True
        self.reason: Optional[str] = None
        self.error: Optional[Exception] = None
        self.calls: list[int] = []

    def has_enrollment(self, user_id: int) -> bool:
        return bool(self._users.get_face_template(user_id))

    def verify_sample(self, user_id: int, sample: FaceSample) -> VerificationResult:
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return VerificationResult(is_match=self.is_match, reason=self.reason)


def _employee(user_id: int, *, is_active: bool = True) -> Employee:
    return Employee(
        user_id=user_id,
        full_name=f"Employee {user_id}",
        username=f"emp{user_id}",
        role=Role.EMPLOYEE,
        dept_id=1,
        is_active=is_active,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, 0)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(
        users={uid: _employee(uid, is_active=uid != INACTIVE_USER) for uid in (1, 2, 3, 4)},
        templates={ENROLLED_USER: [0.1, 0.2, 0.3], NO_ZONE_USER: [0.4, 0.5], INACTIVE_USER: [0.6]},
    )


@pytest.fixture
def zones() -> InMemoryZones:
    return InMemoryZones({ENROLLED_USER: [OFFICE], UNENROLLED_USER: [OFFICE], INACTIVE_USER: [OFFICE]})


@pytest.fixture
def gateway(users) -> FakeGateway:
    return FakeGateway(users)


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def service(attendance_repo, users, zones, gateway, clock) -> AttendanceService:
    return AttendanceService(
        attendance_repo,
        users,
        zones,
        gateway,
        strategy_factory=AttendanceStrategyFactory(),
        clock=clock,
    )


@pytest.fixture
def sample() -> FaceSample:
    return FaceSample(image=b"\xff\xd8fake-jpeg-bytes")


@pytest.fixture
def office_point() -> GeoPoint:
    return GeoPoint(OFFICE.center_latitude, OFFICE.center_longitude)


@pytest.fixture
def make_zones():
    """Build a zone directory for a custom user -> zones mapping."""
    return InMemoryZones
