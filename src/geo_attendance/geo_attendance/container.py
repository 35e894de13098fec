from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.clock import SystemClock
from .core.constants import DEFAULT_FACE_SERVICE_TIMEOUT, DEFAULT_ON_TIME_DEADLINE
from .database.connection import DBConfig, DatabaseConnection
from .enrollment.http_gateway import HttpFaceGateway
from .enrollment.service import EnrollmentService
from .locations.mysql_zone_directory import MySQLZoneDirectory
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    zones_repo: MySQLZoneDirectory
    attendance_repo: MySQLAttendanceRepository
    face_gateway: HttpFaceGateway

    attendance_service: AttendanceService
    enrollment_service: EnrollmentService


def build_container(
    *,
    db_config: dict,
    face_service_url: str,
    face_service_timeout: float = DEFAULT_FACE_SERVICE_TIMEOUT,
    on_time_deadline: time = DEFAULT_ON_TIME_DEADLINE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    zones_repo = MySQLZoneDirectory(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    face_gateway = HttpFaceGateway(face_service_url, users_repo, timeout=face_service_timeout)

    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        zones_repo,
        face_gateway,
        strategy_factory=AttendanceStrategyFactory(deadline=on_time_deadline),
        clock=SystemClock(),
    )
    enrollment_service = EnrollmentService(users_repo, face_gateway)

    return Container(
        conn=conn,
        users_repo=users_repo,
        zones_repo=zones_repo,
        attendance_repo=attendance_repo,
        face_gateway=face_gateway,
        attendance_service=attendance_service,
        enrollment_service=enrollment_service,
    )
