from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Роль пользователя (для доступа к админ-панели)."""

    ADMIN = "admin"
    USER = "user"


class UserStatus(str, Enum):
    """Текущее состояние сотрудника, хранится в таблице users."""

    OFFLINE = "offline"
    WORKING = "working"
    ON_BREAK = "on_break"


class Action(str, Enum):
    """Действие сотрудника, записывается в журнал time_logs."""

    START_WORK = "start_work"
    START_BREAK = "start_break"
    END_BREAK = "end_break"
    END_WORK = "end_work"


class LogPeriod(str, Enum):
    """Период выборки журнала активности."""

    DAY = "day"
    MONTH = "month"
    ALL = "all"
