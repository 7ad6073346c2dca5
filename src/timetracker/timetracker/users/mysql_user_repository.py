from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import Role, UserStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, name, email, role, status, break_start_time, updated_at"


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row_to_user(r: dict[str, Any]) -> User:
        status = UserStatus(r["status"])
        break_start = from_db_datetime(r.get("break_start_time"))
        return User(
            user_id=int(r["user_id"]),
            name=str(r["name"]),
            email=str(r["email"]),
            role=Role(r["role"]),
            status=status,
            break_start_time=break_start if status == UserStatus.ON_BREAK else None,
            updated_at=from_db_datetime(r.get("updated_at")),
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            return self._row_to_user(r) if r else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at ASC")
            return [self._row_to_user(r) for r in fetchall(cur)]

    def update_status(
        self,
        user_id: int,
        *,
        status: UserStatus,
        break_start_time: Optional[datetime],
        updated_at: datetime,
        expected_updated_at: Optional[datetime],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET status=%s, break_start_time=%s, updated_at=%s
                WHERE user_id=%s AND updated_at <=> %s
                """,
                (
                    status.value,
                    to_db_datetime(break_start_time),
                    to_db_datetime(updated_at),
                    user_id,
                    to_db_datetime(expected_updated_at),
                ),
            )
            return cur.rowcount == 1
