from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import Action
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import DayWindow, TimeLogEntry, TimeLogEvent
from .repository import TimeLogRepository


class MySQLTimeLogRepository(TimeLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _window_clause(window: DayWindow, column: str = "timestamp") -> tuple[str, list[Any]]:
        clause = f"{column} <= %s"
        params: list[Any] = [to_db_datetime(window.end)]
        if window.start is not None:
            clause = f"{column} >= %s AND " + clause
            params.insert(0, to_db_datetime(window.start))
        return clause, params

    def fetch_events(self, user_id: int, window: DayWindow) -> Sequence[TimeLogEvent]:
        clause, params = self._window_clause(window)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT log_id, user_id, action, timestamp
                FROM time_logs
                WHERE user_id=%s AND {clause}
                ORDER BY timestamp ASC, log_id ASC
                """,
                (user_id, *params),
            )
            return [
                TimeLogEvent(
                    event_id=int(r["log_id"]),
                    user_id=int(r["user_id"]),
                    action=Action(r["action"]),
                    timestamp=from_db_datetime(r["timestamp"]),
                )
                for r in fetchall(cur)
            ]

    def last_event_before(self, user_id: int, moment: datetime) -> Optional[TimeLogEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, user_id, action, timestamp
                FROM time_logs
                WHERE user_id=%s AND timestamp < %s
                ORDER BY timestamp DESC, log_id DESC
                LIMIT 1
                """,
                (user_id, to_db_datetime(moment)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return TimeLogEvent(
                event_id=int(r["log_id"]),
                user_id=int(r["user_id"]),
                action=Action(r["action"]),
                timestamp=from_db_datetime(r["timestamp"]),
            )

    def append_event(self, event: TimeLogEvent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO time_logs(user_id, action, timestamp) VALUES(%s,%s,%s)",
                (event.user_id, event.action.value, to_db_datetime(event.timestamp)),
            )
            return int(cur.lastrowid)

    def list_recent(self, window: DayWindow, *, user_id: Optional[int] = None) -> Sequence[TimeLogEntry]:
        clause, params = self._window_clause(window, "l.timestamp")
        if user_id is not None:
            clause += " AND l.user_id=%s"
            params.append(user_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT l.log_id, l.user_id, l.action, l.timestamp, u.name, u.email
                FROM time_logs l
                JOIN users u ON u.user_id = l.user_id
                WHERE {clause}
                ORDER BY l.timestamp DESC, l.log_id DESC
                """,
                tuple(params),
            )
            return [
                TimeLogEntry(
                    event_id=int(r["log_id"]),
                    user_id=int(r["user_id"]),
                    user_name=str(r["name"]),
                    user_email=str(r["email"]),
                    action=Action(r["action"]),
                    timestamp=from_db_datetime(r["timestamp"]),
                )
                for r in fetchall(cur)
            ]
