from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.enums import Role
from ..core.ids import DepartmentId, UserId
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_as_domain, fetchone, from_db_datetime, to_db_datetime
from .model import Approver, User
from .repository import UserStore

_USER_COLUMNS = "id, email, password_hash, name, role, department_id, is_active, created_at, updated_at"


class MySQLUserRepository(UserStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_domain(row: Dict[str, Any]) -> User:
        return User(
            id=UserId(row["id"]),
            email=row["email"],
            name=row["name"],
            role=Role(row["role"]),
            department_id=DepartmentId(row["department_id"]) if row.get("department_id") else None,
            is_active=bool(row.get("is_active", True)),
            created_at=from_db_datetime(row["created_at"]),
            updated_at=from_db_datetime(row["updated_at"]),
            password_hash=row.get("password_hash"),
        )

    def find_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return self._to_domain(row) if row else None

    def find_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return self._to_domain(row) if row else None

    def find_approver(self, user_id: str) -> Optional[Approver]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, role FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            if not row:
                return None
            return Approver(id=UserId(row["id"]), role=Role(row["role"]))

    def create(self, user: User) -> User:
        with db_cursor(self._conn_factory) as (_, cur), duplicate_key_as_domain("uq_users_email"):
            cur.execute(
                """
                INSERT INTO users(id, email, password_hash, name, role, department_id, is_active, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user.id,
                    user.email,
                    user.password_hash,
                    user.name,
                    user.role.value,
                    user.department_id,
                    int(user.is_active),
                    to_db_datetime(user.created_at),
                    to_db_datetime(user.updated_at),
                ),
            )
        return user

    def update(self, user: User) -> User:
        # password_hash is left untouched: the update workflow never changes it
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET name=%s, role=%s, department_id=%s, is_active=%s, updated_at=%s
                WHERE id=%s
                """,
                (
                    user.name,
                    user.role.value,
                    user.department_id,
                    int(user.is_active),
                    to_db_datetime(user.updated_at),
                    user.id,
                ),
            )
        return user
