from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class UserRepository(Protocol):
    """Repository interface for employees and their enrolled face templates.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_face_template(self, user_id: int) -> Optional[Sequence[float]]:
        raise NotImplementedError

    def set_face_template(self, user_id: int, template: Sequence[float]) -> bool:
        raise NotImplementedError
