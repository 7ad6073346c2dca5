from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import elapsed_seconds, ensure_aware, format_duration_hm, format_local, now_utc
from ..core.constants import WORK_END_HOUR, WORK_START_HOUR
from ..core.enums import Action, LogPeriod, UserStatus
from ..core.exceptions import BreakCapExceeded, StaleSnapshotError, StorageError, ValidationError
from ..timelog.model import DayWindow, TimeLogEntry, TimeLogEvent
from ..timelog.repository import TimeLogRepository
from ..users.model import User
from ..users.repository import UserRepository
from .aggregator import DayTotals, aggregate_day
from .break_policy import BreakPolicy
from .state_machine import Transition, allowed_actions, apply_action
from .stats import StatsCounts, reduce_stats

logger = logging.getLogger(__name__)

ACTION_MESSAGES = {
    Action.START_WORK: "Рабочий день начат!",
    Action.START_BREAK: "Перерыв начат. Отдыхайте!",
    Action.END_BREAK: "Перерыв завершен. Продолжаем работу!",
    Action.END_WORK: "Рабочий день завершен!",
}

ACTION_LABELS = {
    Action.START_WORK: "Начало работы",
    Action.START_BREAK: "Начало перерыва",
    Action.END_BREAK: "Конец перерыва",
    Action.END_WORK: "Конец работы",
}

ACTION_CSS = {
    Action.START_WORK: "bg-green-100 text-green-800",
    Action.START_BREAK: "bg-orange-100 text-orange-800",
    Action.END_BREAK: "bg-blue-100 text-blue-800",
    Action.END_WORK: "bg-red-100 text-red-800",
}

STATUS_LABELS = {
    UserStatus.WORKING: "На работе",
    UserStatus.ON_BREAK: "На перерыве",
    UserStatus.OFFLINE: "Не в сети",
}


@dataclass(frozen=True)
class ActionResult:
    user: User
    event: TimeLogEvent
    message: str


@dataclass(frozen=True)
class DaySummary:
    user: User
    totals: DayTotals
    break_cap_seconds: int
    can_start_break: bool
    break_exceeded: bool
    remaining_break_seconds: int

    def to_dict(self) -> dict:
        return {
            "user_id": self.user.user_id,
            "name": self.user.name,
            "status": self.user.status.value,
            "status_label": STATUS_LABELS[self.user.status],
            "break_start_time": self.user.break_start_time.isoformat() if self.user.break_start_time else None,
            "allowed_actions": [a.value for a in allowed_actions(self.user.status)],
            "daily_break_seconds": self.totals.daily_break_seconds,
            "work_seconds": self.totals.work_seconds,
            "daily_break": format_duration_hm(self.totals.daily_break_seconds),
            "work_time": format_duration_hm(self.totals.work_seconds),
            "break_cap_seconds": self.break_cap_seconds,
            "remaining_break_seconds": self.remaining_break_seconds,
            "can_start_break": self.can_start_break,
            "break_exceeded": self.break_exceeded,
            "working_hours": f"{WORK_START_HOUR}:00 - {WORK_END_HOUR}:00",
        }


class TimeTrackingService:
    """Orchestrates the pure core (state machine, aggregator, policy) over the stores."""

    def __init__(
        self,
        users: UserRepository,
        timelog: TimeLogRepository,
        *,
        policy: Optional[BreakPolicy] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._users = users
        self._timelog = timelog
        self._policy = policy or BreakPolicy()
        self._clock = clock

    @property
    def policy(self) -> BreakPolicy:
        return self._policy

    def _resolve_now(self, now: datetime | None) -> datetime:
        return ensure_aware(now) if now is not None else self._clock()

    def _get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Пользователь не найден")
        return user

    def _totals_for(self, user: User, now: datetime) -> DayTotals:
        window = DayWindow.today(now)
        events = self._timelog.fetch_events(user.user_id, window)
        before = self._timelog.last_event_before(user.user_id, window.start)
        totals = aggregate_day(
            events,
            user.status,
            user.break_start_time,
            now,
            window=window,
            break_open_at_start=before is not None and before.action == Action.START_BREAK,
        )
        for anomaly in totals.anomalies:
            logger.warning(
                "malformed log sequence user_id=%s kind=%s at=%s",
                user.user_id,
                anomaly.kind.value,
                anomaly.timestamp.isoformat() if anomaly.timestamp else "-",
            )
        return totals

    def perform_action(self, user_id: int, action: Action, *, now: datetime | None = None) -> ActionResult:
        now = self._resolve_now(now)
        user = self._get_user(user_id)

        if action == Action.START_BREAK:
            totals = self._totals_for(user, now)
            if user.status == UserStatus.WORKING and not self._policy.can_start_break(
                user.status, totals.daily_break_seconds
            ):
                logger.info(
                    "start_break rejected user_id=%s used=%ss cap=%ss",
                    user_id,
                    totals.daily_break_seconds,
                    self._policy.cap_seconds,
                )
                raise BreakCapExceeded(totals.daily_break_seconds, self._policy.cap_seconds)

        transition: Transition = apply_action(user, action, now)
        nxt = transition.next_user

        # Claim the status row first; the log append follows only if we won the CAS
        # and a failed append puts the old snapshot back.
        updated = self._users.update_status(
            user_id,
            status=nxt.status,
            break_start_time=nxt.break_start_time,
            updated_at=now,
            expected_updated_at=user.updated_at,
        )
        if not updated:
            raise StaleSnapshotError(f"User {user_id} was modified concurrently")

        try:
            event_id = self._timelog.append_event(transition.event)
        except StorageError:
            logger.exception("append failed user_id=%s action=%s, restoring status", user_id, action.value)
            self._restore_status(user, now)
            raise
        event = TimeLogEvent(
            user_id=transition.event.user_id,
            action=transition.event.action,
            timestamp=transition.event.timestamp,
            event_id=event_id,
        )
        logger.info("user_id=%s %s: %s -> %s", user_id, action.value, user.status.value, nxt.status.value)
        return ActionResult(user=nxt, event=event, message=ACTION_MESSAGES[action])

    def _restore_status(self, user: User, claimed_at: datetime) -> None:
        """Put back the snapshot we replaced when the event could not be logged."""
        try:
            restored = self._users.update_status(
                user.user_id,
                status=user.status,
                break_start_time=user.break_start_time,
                updated_at=user.updated_at,
                expected_updated_at=claimed_at,
            )
        except StorageError:
            logger.exception("status restore failed user_id=%s", user.user_id)
            return
        if not restored:
            logger.error("status restore lost to a concurrent update user_id=%s", user.user_id)

    def day_summary(self, user_id: int, *, now: datetime | None = None) -> DaySummary:
        now = self._resolve_now(now)
        user = self._get_user(user_id)
        totals = self._totals_for(user, now)
        used = totals.daily_break_seconds
        return DaySummary(
            user=user,
            totals=totals,
            break_cap_seconds=self._policy.cap_seconds,
            can_start_break=self._policy.can_start_break(user.status, used),
            break_exceeded=self._policy.is_exceeded(used),
            remaining_break_seconds=self._policy.remaining_seconds(used),
        )

    def stats(self) -> StatsCounts:
        return reduce_stats(self._users.list_all())

    def list_users_with_break_time(self, *, now: datetime | None = None) -> list[dict]:
        """Admin table: every user with today's break time and overrun warning."""
        now = self._resolve_now(now)
        day_start = DayWindow.today(now).start
        rows = []
        for user in self._users.list_all():
            used = self._totals_for(user, now).daily_break_seconds
            current = "—"
            if user.status == UserStatus.ON_BREAK and user.break_start_time:
                started = max(ensure_aware(user.break_start_time), day_start)
                current = format_duration_hm(elapsed_seconds(started, now))
            exceeded = self._policy.is_exceeded(used)
            rows.append(
                {
                    "user_id": user.user_id,
                    "name": user.name,
                    "email": user.email,
                    "role": user.role.value,
                    "status": user.status.value,
                    "status_label": STATUS_LABELS[user.status],
                    "daily_break_seconds": used,
                    "daily_break": format_duration_hm(used),
                    "current_break": current,
                    "break_exceeded": exceeded,
                    "break_excess": f"-{format_duration_hm(self._policy.excess_seconds(used))}" if exceeded else "",
                }
            )
        return rows

    def get_user_logs(self, user_id: int, period: LogPeriod, *, now: datetime | None = None) -> list[dict]:
        now = self._resolve_now(now)
        self._get_user(user_id)
        window = DayWindow.for_period(period, now)
        return [self._to_ui(e) for e in self._timelog.list_recent(window, user_id=user_id)]

    def get_all_logs(self, period: LogPeriod, *, now: datetime | None = None) -> list[dict]:
        now = self._resolve_now(now)
        window = DayWindow.for_period(period, now)
        return [self._to_ui(e) for e in self._timelog.list_recent(window)]

    def _to_ui(self, e: TimeLogEntry) -> dict:
        return {
            "log_id": e.event_id,
            "user_id": e.user_id,
            "user_name": e.user_name,
            "user_email": e.user_email,
            "action": e.action.value,
            "action_label": ACTION_LABELS.get(e.action, e.action.value),
            "css_class": ACTION_CSS.get(e.action, "bg-gray-100 text-gray-800"),
            "timestamp": e.timestamp.isoformat(),
            "local_time": format_local(e.timestamp),
        }
