from __future__ import annotations

from datetime import datetime, timedelta, timezone

from ..core.constants import LOCAL_UTC_OFFSET_HOURS

LOCAL_TZ = timezone(timedelta(hours=LOCAL_UTC_OFFSET_HOURS), name="UTC+05:00")


def now_utc() -> datetime:
    """Current time (aware, UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by MySQL DATETIME) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_local(value: datetime) -> datetime:
    return ensure_aware(value).astimezone(LOCAL_TZ)


def start_of_local_day(now: datetime) -> datetime:
    local = to_local(now)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_local_month(now: datetime) -> datetime:
    return start_of_local_day(now).replace(day=1)


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds between two instants, floored, never negative."""
    seconds = int((ensure_aware(end) - ensure_aware(start)).total_seconds())
    return max(seconds, 0)


def format_local(value: datetime, fmt: str = "%d.%m.%Y %H:%M:%S") -> str:
    return to_local(value).strftime(fmt)


def format_duration_hm(total_seconds: int) -> str:
    """1ч 5м style used across the dashboard."""
    total_seconds = max(int(total_seconds), 0)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    return f"{hours}ч {minutes}м"
