from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored in the database."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    ON_LEAVE = "ON_LEAVE"


class AttendanceErrorKind(str, Enum):
    """Identifiable rejection kinds returned by check-in / check-out."""

    INVALID_INPUT = "INVALID_INPUT"
    NOT_ENROLLED = "NOT_ENROLLED"
    NO_LOCATION_ASSIGNED = "NO_LOCATION_ASSIGNED"
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
    ALREADY_CHECKED_OUT = "ALREADY_CHECKED_OUT"
    NO_CHECK_IN_FOUND = "NO_CHECK_IN_FOUND"
    FACE_MISMATCH = "FACE_MISMATCH"
    OUTSIDE_GEOFENCE = "OUTSIDE_GEOFENCE"
    VERIFICATION_UNAVAILABLE = "VERIFICATION_UNAVAILABLE"
