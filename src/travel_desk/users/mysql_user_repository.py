from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional, Sequence

from ..core.constants import DEFAULT_ANNUAL_TRAVEL_BUDGET
from ..core.enums import EffectiveRole, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    id, email, password_hash, first_name, last_name, role, active_role,
    annual_travel_budget, created_at, updated_at
"""


def _row_to_user(row: dict) -> User:
    active_role = row.get("active_role")
    return User(
        id=str(row["id"]),
        email=row["email"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        role=Role(row["role"]),
        active_role=EffectiveRole(active_role) if active_role else None,
        password_hash=row.get("password_hash"),
        annual_travel_budget=to_decimal(row.get("annual_travel_budget"), DEFAULT_ANNUAL_TRAVEL_BUDGET),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at DESC")
            return [_row_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        email: str,
        first_name: str,
        last_name: str,
        role: Role,
        password_hash: Optional[str],
        annual_travel_budget: Decimal,
    ) -> str:
        user_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, email, password_hash, first_name, last_name, role, annual_travel_budget)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, email, password_hash, first_name, last_name, role.value, annual_travel_budget),
            )
        return user_id

    def update_user(
        self,
        user_id: str,
        *,
        email: str,
        first_name: str,
        last_name: str,
        role: Role,
        active_role: Optional[EffectiveRole],
        annual_travel_budget: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET email=%s, first_name=%s, last_name=%s, role=%s, active_role=%s, annual_travel_budget=%s
                WHERE id=%s
                """,
                (
                    email,
                    first_name,
                    last_name,
                    role.value,
                    active_role.value if active_role else None,
                    annual_travel_budget,
                    user_id,
                ),
            )
            # MySQL reports changed rows, not matched rows, so check existence separately.
            cur.execute("SELECT 1 AS found FROM users WHERE id=%s", (user_id,))
            return fetchone(cur) is not None

    def set_active_role(self, user_id: str, active_role: EffectiveRole) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET active_role=%s WHERE id=%s AND role='admin'",
                (active_role.value, user_id),
            )

    def update_password(self, user_id: str, password_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE id=%s", (password_hash, user_id))

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0
