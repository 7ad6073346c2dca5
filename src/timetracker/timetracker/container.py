from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_BREAK_CAP_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .timelog.mysql_timelog_repository import MySQLTimeLogRepository
from .timelog.repository import TimeLogRepository
from .tracking.break_policy import BreakPolicy
from .tracking.service import TimeTrackingService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    timelog_repo: TimeLogRepository

    tracking_service: TimeTrackingService


def build_container(*, db_config: dict, break_cap_seconds: int = DEFAULT_BREAK_CAP_SECONDS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    timelog_repo = MySQLTimeLogRepository(conn)

    tracking_service = TimeTrackingService(
        users_repo,
        timelog_repo,
        policy=BreakPolicy(cap_seconds=int(break_cap_seconds)),
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        timelog_repo=timelog_repo,
        tracking_service=tracking_service,
    )
