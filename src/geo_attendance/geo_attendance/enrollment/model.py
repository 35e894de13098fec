from __future__ import annotations

import base64
import binascii
import hashlib
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class FaceSample:
    """A face image submitted with a check-in / check-out or an enrollment."""

    image: bytes
    filename: str = "snapshot.jpg"

    @classmethod
    def from_base64(cls, value: str, *, filename: str = "snapshot.jpg") -> "FaceSample":
        if not isinstance(value, str):
            raise ValidationError("snapshotImage must be a base64 string")
        if not value or not value.strip():
            raise ValidationError("snapshotImage is required")
        payload = value.strip()
        # Browsers send data URLs: "data:image/jpeg;base64,...."
        if payload.startswith("data:") and "," in payload:
            payload = payload.split(",", 1)[1]
        try:
            image = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError("snapshotImage is not valid base64") from None
        if not image:
            raise ValidationError("snapshotImage is empty")
        return cls(image=image, filename=filename)

    @property
    def reference(self) -> str:
        return "sha256:" + hashlib.sha256(self.image).hexdigest()


@dataclass(frozen=True)
class VerificationResult:
    is_match: bool
    reason: Optional[str] = None
    distance: Optional[float] = None
