from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by the attendance engine.

    Plain data object; credentials and profile editing live in the external user service.
    """

    user_id: int
    full_name: str
    username: str
    role: Role
    dept_id: Optional[int]
    is_active: bool = True
