from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import ensure_aware, start_of_local_day, start_of_local_month
from ..core.enums import Action, LogPeriod


@dataclass(frozen=True)
class TimeLogEvent:
    """Domain entity: one immutable entry of the append-only action log."""

    user_id: int
    action: Action
    timestamp: datetime
    event_id: Optional[int] = None


@dataclass(frozen=True)
class TimeLogEntry:
    """Read-model for the admin log views (event joined with the user's name)."""

    event_id: int
    user_id: int
    user_name: str
    user_email: str
    action: Action
    timestamp: datetime


@dataclass(frozen=True)
class DayWindow:
    """Time range from ``start`` up to and including ``end`` (the current instant).

    ``start=None`` means unbounded. ``end`` is inclusive so that an event stamped
    at exactly ``now`` already belongs to the day.
    """

    start: Optional[datetime]
    end: datetime

    @classmethod
    def today(cls, now: datetime) -> "DayWindow":
        return cls(start=start_of_local_day(now), end=ensure_aware(now))

    @classmethod
    def for_period(cls, period: LogPeriod, now: datetime) -> "DayWindow":
        if period is LogPeriod.DAY:
            return cls.today(now)
        if period is LogPeriod.MONTH:
            return cls(start=start_of_local_month(now), end=ensure_aware(now))
        return cls(start=None, end=ensure_aware(now))

    def contains(self, moment: datetime) -> bool:
        moment = ensure_aware(moment)
        if self.start is not None and moment < self.start:
            return False
        return moment <= self.end
