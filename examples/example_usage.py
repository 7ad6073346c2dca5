"""Пример: ядро учёта времени без Flask и без БД.

Состояние, журнал и лимит перерыва вычисляются чистыми функциями; `now` передаётся явно.
"""

from datetime import datetime, timedelta, timezone

from src.timetracker.timetracker.core.enums import Action, Role
from src.timetracker.timetracker.tracking.aggregator import aggregate_day
from src.timetracker.timetracker.tracking.break_policy import BreakPolicy
from src.timetracker.timetracker.tracking.state_machine import apply_action
from src.timetracker.timetracker.users.model import User


def main():
    policy = BreakPolicy(cap_seconds=3600)
    user = User(user_id=1, name="Demo", email="demo@example.com", role=Role.USER)
    now = datetime(2026, 2, 2, 4, 0, tzinfo=timezone.utc)
    log = []

    for action, minutes in [(Action.START_WORK, 0), (Action.START_BREAK, 90), (Action.END_BREAK, 100)]:
        t = apply_action(user, action, now + timedelta(minutes=minutes))
        user = t.next_user
        log.append(t.event)

    at = now + timedelta(minutes=120)
    totals = aggregate_day(log, user.status, user.break_start_time, at)
    print(user.status.value, totals.daily_break_seconds, totals.work_seconds)
    print("can start break:", policy.can_start_break(user.status, totals.daily_break_seconds))


if __name__ == "__main__":
    main()
