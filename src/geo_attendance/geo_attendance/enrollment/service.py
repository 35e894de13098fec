from __future__ import annotations

import logging
from typing import Protocol, Sequence

from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import FaceSample

logger = logging.getLogger(__name__)


class TemplateGenerator(Protocol):
    def generate_template(self, sample: FaceSample) -> Sequence[float]:
        raise NotImplementedError


class EnrollmentService:
    """Use case: enroll (or re-enroll) an employee's face template."""

    def __init__(self, users: UserRepository, generator: TemplateGenerator):
        self._users = users
        self._generator = generator

    def enroll(self, user_id: int, sample: FaceSample) -> int:
        """Store a fresh template for ``user_id``; returns the template length."""

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")

        template = self._generator.generate_template(sample)
        if not template:
            raise ValidationError("No face detected in the image")

        self._users.set_face_template(user.user_id, template)
        logger.info("Enrolled face template for user %s (%d dims)", user.user_id, len(template))
        return len(template)
