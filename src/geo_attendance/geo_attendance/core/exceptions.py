from __future__ import annotations

from .enums import AttendanceErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AttendanceError(DomainError):
    """Typed rejection of a check-in or check-out attempt.

    Every subclass pins one ``AttendanceErrorKind`` so callers (and tests) can branch
    on the kind instead of parsing messages.
    """

    kind: AttendanceErrorKind
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(AttendanceError):
    kind = AttendanceErrorKind.INVALID_INPUT


class NotEnrolledError(AttendanceError):
    kind = AttendanceErrorKind.NOT_ENROLLED


class NoLocationAssignedError(AttendanceError):
    kind = AttendanceErrorKind.NO_LOCATION_ASSIGNED


class AlreadyCheckedInError(AttendanceError):
    kind = AttendanceErrorKind.ALREADY_CHECKED_IN


class AlreadyCheckedOutError(AttendanceError):
    kind = AttendanceErrorKind.ALREADY_CHECKED_OUT


class NoCheckInFoundError(AttendanceError):
    kind = AttendanceErrorKind.NO_CHECK_IN_FOUND


class FaceMismatchError(AttendanceError):
    kind = AttendanceErrorKind.FACE_MISMATCH


class OutsideGeofenceError(AttendanceError):
    kind = AttendanceErrorKind.OUTSIDE_GEOFENCE


class VerificationUnavailableError(AttendanceError):
    """Transient: the face service timed out or is down. Safe to retry with backoff."""

    kind = AttendanceErrorKind.VERIFICATION_UNAVAILABLE
    retryable = True


class StorageError(Exception):
    """Unexpected persistence failure. Fatal to the request."""


class DuplicateKeyError(StorageError):
    """Insert violated the (user, work date) uniqueness constraint."""


class VerificationServiceError(Exception):
    """Transport-level failure talking to the face verification service."""


class ServiceUnavailableError(VerificationServiceError):
    pass


class VerificationTimeoutError(VerificationServiceError):
    pass
