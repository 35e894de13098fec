from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.clock import Clock, SystemClock
from ..common.validators import require_latitude, require_longitude
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    DuplicateKeyError,
    FaceMismatchError,
    InvalidInputError,
    NoCheckInFoundError,
    NoLocationAssignedError,
    NotEnrolledError,
    OutsideGeofenceError,
    ValidationError,
    VerificationServiceError,
    VerificationUnavailableError,
)
from ..enrollment.gateway import EnrollmentGateway
from ..enrollment.model import FaceSample
from ..geofence.evaluator import find_containing_zone
from ..geofence.model import GeoPoint
from ..locations.repository import ZoneDirectory
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Decides check-in / check-out outcomes.

    Per (user, day) the record moves NoRecord -> CheckedIn -> CheckedOut and never back.
    Rejections are raised as ``AttendanceError`` subclasses, one per kind. Cheap local
    checks run before the remote face comparison, and nothing is written until every
    check has passed.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        zones: ZoneDirectory,
        gateway: EnrollmentGateway,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Clock | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._zones = zones
        self._gateway = gateway
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock or SystemClock()

    def attempt_check_in(
        self,
        user_id: int,
        point: Optional[GeoPoint],
        sample: Optional[FaceSample],
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = self._resolve_now(now)

        if point is None or sample is None:
            raise InvalidInputError("Latitude, longitude and snapshotImage are required for check-in")
        try:
            require_latitude(point.latitude)
            require_longitude(point.longitude)
        except ValidationError as exc:
            raise InvalidInputError(str(exc)) from None

        user = self._users.get_by_id(user_id)
        if not user or not user.is_active or not self._gateway.has_enrollment(user_id):
            raise NotEnrolledError("Your face is not enrolled. Please contact an administrator")

        zones = self._zones.zones_for_user(user_id)
        if not zones:
            raise NoLocationAssignedError("No work location is assigned to you")

        if self._attendance.find_today_record(user_id, now):
            raise AlreadyCheckedInError("You have already checked in today")

        self._verify(user_id, sample)

        zone = find_containing_zone(point, zones)
        if zone is None:
            logger.warning("Check-in outside geofence: user=%s point=(%s, %s)", user_id, point.latitude, point.longitude)
            raise OutsideGeofenceError("Check-in denied: you are outside of any allowed work location radius")

        decision = self._factory.for_checkin(now=now).decide_checkin(now=now, deadline=self._factory.deadline)

        try:
            record = self._attendance.insert_check_in(
                user_id=user_id,
                check_in_time=now,
                status=decision.status,
                location=point,
                snapshot_ref=sample.reference,
            )
        except DuplicateKeyError:
            raise AlreadyCheckedInError("You have already checked in today") from None

        logger.info(
            "Check-in: user=%s record=%s status=%s zone=%s%s",
            user_id,
            record.record_id,
            record.status.value,
            zone.name,
            f" ({decision.note})" if decision.note else "",
        )
        return record

    def attempt_check_out(
        self,
        user_id: int,
        sample: Optional[FaceSample] = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Close today's record.

        Face verification is optional here: when a sample is supplied it must match,
        when it is omitted the check-out proceeds without one.
        """

        now = self._resolve_now(now)

        record = self._attendance.find_today_record(user_id, now)
        if not record:
            raise NoCheckInFoundError("No check-in record found for you today. Cannot check out")
        if record.check_out_time is not None:
            raise AlreadyCheckedOutError("You have already checked out today")
        if now < record.check_in_time:
            raise InvalidInputError("Check-out time cannot be earlier than check-in time")

        if sample is not None:
            self._verify(user_id, sample)

        updated = self._attendance.update_check_out(
            record_id=record.record_id,
            check_out_time=now,
            snapshot_ref=sample.reference if sample is not None else None,
        )
        if updated is None:
            raise AlreadyCheckedOutError("You have already checked out today")

        logger.info("Check-out: user=%s record=%s", user_id, updated.record_id)
        return updated

    def get_today_record(self, user_id: int, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        return self._attendance.find_today_record(user_id, self._resolve_now(now))

    def list_records(self, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all(limit=limit)

    def delete_record(self, record_id: int) -> None:
        if not self._attendance.delete_by_id(record_id):
            raise ValidationError("Attendance record not found")
        logger.info("Deleted attendance record %s", record_id)

    def _resolve_now(self, now: datetime | None) -> datetime:
        # Stored timestamps have whole-second precision; keep day boundaries consistent with them.
        return (now or self._clock.now()).replace(microsecond=0)

    def _verify(self, user_id: int, sample: FaceSample) -> None:
        try:
            result = self._gateway.verify_sample(user_id, sample)
        except VerificationServiceError as exc:
            logger.warning("Face verification unavailable for user %s: %s", user_id, exc)
            raise VerificationUnavailableError("Face verification is temporarily unavailable. Please try again") from exc

        if not result.is_match:
            logger.warning("Face mismatch for user %s: %s", user_id, result.reason)
            raise FaceMismatchError(result.reason or "Face verification failed")
