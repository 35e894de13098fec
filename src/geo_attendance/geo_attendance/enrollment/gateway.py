from __future__ import annotations

from typing import Protocol

from .model import FaceSample, VerificationResult


class EnrollmentGateway(Protocol):
    """Capability boundary to the face verification service.

    ``verify_sample`` raises ``ServiceUnavailableError`` / ``VerificationTimeoutError``
    for transport failures; a returned ``is_match=False`` is a definitive decision.
    """

    def has_enrollment(self, user_id: int) -> bool:
        raise NotImplementedError

    def verify_sample(self, user_id: int, sample: FaceSample) -> VerificationResult:
        raise NotImplementedError
