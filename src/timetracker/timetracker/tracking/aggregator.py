from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from ..common.datetime_utils import elapsed_seconds, ensure_aware
from ..core.enums import Action, UserStatus
from ..timelog.model import DayWindow, TimeLogEvent


class AnomalyKind(str, Enum):
    UNMATCHED_END_BREAK = "unmatched_end_break"
    OVERWRITTEN_START_BREAK = "overwritten_start_break"
    UNMATCHED_END_WORK = "unmatched_end_work"
    NEGATIVE_SPAN = "negative_span"
    OPEN_WORK_WHILE_OFFLINE = "open_work_while_offline"
    MISSING_BREAK_START = "missing_break_start"


@dataclass(frozen=True)
class LogAnomaly:
    """A malformed spot in the log that was skipped instead of raising."""

    kind: AnomalyKind
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class DayTotals:
    daily_break_seconds: int
    work_seconds: int
    anomalies: tuple[LogAnomaly, ...] = ()


def aggregate_day(
    events: Iterable[TimeLogEvent],
    live_status: UserStatus,
    live_break_start: Optional[datetime],
    now: datetime,
    *,
    window: Optional[DayWindow] = None,
    break_open_at_start: bool = False,
) -> DayTotals:
    """Replay one user's events for a day into break and work durations.

    Single linear scan with one open-break cursor and one open-work cursor.
    Malformed sequences never raise: an ``end_break`` without a matching
    ``start_break`` is ignored, a second ``start_break`` overwrites the first,
    and a dangling ``start_break`` is left to the live status to close.

    ``break_open_at_start`` marks a break that was already running when the
    window opened (its ``start_break`` lies before ``window.start``). The
    cursor then starts at ``window.start``, so the ``end_break`` that closes
    it counts the part after midnight.

    The most recent ``start_work`` defines the work span; it runs to the
    matching ``end_work`` or, while the user is still on shift, to ``now``.
    """
    now = ensure_aware(now)
    anomalies: list[LogAnomaly] = []

    break_seconds = 0
    break_cursor: Optional[datetime] = None
    if break_open_at_start and window is not None and window.start is not None:
        break_cursor = window.start
    work_start: Optional[datetime] = None
    work_end: Optional[datetime] = None

    # sorted() is stable, so equal timestamps keep their log order.
    for event in sorted(events, key=lambda e: ensure_aware(e.timestamp)):
        ts = ensure_aware(event.timestamp)
        if window is not None and not window.contains(ts):
            continue

        if event.action == Action.START_BREAK:
            if break_cursor is not None:
                anomalies.append(LogAnomaly(AnomalyKind.OVERWRITTEN_START_BREAK, break_cursor))
            break_cursor = ts
        elif event.action == Action.END_BREAK:
            if break_cursor is None:
                anomalies.append(LogAnomaly(AnomalyKind.UNMATCHED_END_BREAK, ts))
                continue
            break_seconds += elapsed_seconds(break_cursor, ts)
            break_cursor = None
        elif event.action == Action.START_WORK:
            work_start, work_end = ts, None
        elif event.action == Action.END_WORK:
            if work_start is None or work_end is not None:
                anomalies.append(LogAnomaly(AnomalyKind.UNMATCHED_END_WORK, ts))
                continue
            work_end = ts

    if live_status == UserStatus.ON_BREAK:
        if live_break_start is None:
            anomalies.append(LogAnomaly(AnomalyKind.MISSING_BREAK_START, None))
        else:
            start = ensure_aware(live_break_start)
            if window is not None and window.start is not None and start < window.start:
                start = window.start
            if start > now:
                anomalies.append(LogAnomaly(AnomalyKind.NEGATIVE_SPAN, start))
            break_seconds += elapsed_seconds(start, now)

    work_seconds = 0
    if work_start is not None:
        if work_end is not None:
            work_seconds = elapsed_seconds(work_start, work_end)
        elif live_status in (UserStatus.WORKING, UserStatus.ON_BREAK):
            work_seconds = elapsed_seconds(work_start, now)
        else:
            anomalies.append(LogAnomaly(AnomalyKind.OPEN_WORK_WHILE_OFFLINE, work_start))

    return DayTotals(
        daily_break_seconds=break_seconds,
        work_seconds=work_seconds,
        anomalies=tuple(anomalies),
    )
