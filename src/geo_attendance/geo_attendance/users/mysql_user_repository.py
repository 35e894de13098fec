from __future__ import annotations

import json
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, username, role, dept_id, is_active
                FROM users
                WHERE user_id=%s
                """,
                (user_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Employee(
                user_id=int(row["user_id"]),
                full_name=row["full_name"],
                username=row["username"],
                role=Role(row["role"]),
                dept_id=row.get("dept_id"),
                is_active=bool(row.get("is_active", True)),
            )

    def get_face_template(self, user_id: int) -> Optional[Sequence[float]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT face_template FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            if not row or not row.get("face_template"):
                return None
            template = json.loads(row["face_template"])
            return [float(v) for v in template] or None

    def set_face_template(self, user_id: int, template: Sequence[float]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET face_template=%s WHERE user_id=%s",
                (json.dumps([float(v) for v in template]), int(user_id)),
            )
            return cur.rowcount > 0
