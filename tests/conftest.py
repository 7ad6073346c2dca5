from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

import pytest

from src.timetracker.timetracker.core.enums import Role, UserStatus
from src.timetracker.timetracker.timelog.model import DayWindow, TimeLogEntry, TimeLogEvent
from src.timetracker.timetracker.users.model import User


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self.users_by_id: dict[int, User] = {u.user_id: u for u in users}
        self.fail_next_update = False

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def list_all(self):
        return list(self.users_by_id.values())

    def update_status(self, user_id, *, status, break_start_time, updated_at, expected_updated_at) -> bool:
        current = self.users_by_id.get(user_id)
        if current is None or self.fail_next_update or current.updated_at != expected_updated_at:
            self.fail_next_update = False
            return False
        self.users_by_id[user_id] = replace(
            current, status=status, break_start_time=break_start_time, updated_at=updated_at
        )
        return True


class InMemoryTimeLog:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.events: list[TimeLogEvent] = []

    def fetch_events(self, user_id: int, window: DayWindow):
        items = [e for e in self.events if e.user_id == user_id and window.contains(e.timestamp)]
        return sorted(items, key=lambda e: e.timestamp)

    def last_event_before(self, user_id: int, moment: datetime) -> Optional[TimeLogEvent]:
        items = [e for e in self.events if e.user_id == user_id and e.timestamp < moment]
        return max(items, key=lambda e: (e.timestamp, e.event_id or 0), default=None)

    def append_event(self, event: TimeLogEvent) -> int:
        event_id = len(self.events) + 1
        self.events.append(replace(event, event_id=event_id))
        return event_id

    def list_recent(self, window: DayWindow, *, user_id=None):
        out = []
        for e in self.events:
            if not window.contains(e.timestamp):
                continue
            if user_id is not None and e.user_id != user_id:
                continue
            u = self._users.get_by_id(e.user_id)
            out.append(
                TimeLogEntry(
                    event_id=e.event_id,
                    user_id=e.user_id,
                    user_name=u.name,
                    user_email=u.email,
                    action=e.action,
                    timestamp=e.timestamp,
                )
            )
        out.sort(key=lambda x: (x.timestamp, x.event_id), reverse=True)
        return out


@pytest.fixture
def fixed_now() -> datetime:
    # 10:00 in Tashkent (UTC+5)
    return datetime(2026, 2, 2, 5, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def employee() -> User:
    return User(user_id=1, name="Алишер", email="alisher@example.com", role=Role.USER)


@pytest.fixture
def admin() -> User:
    return User(user_id=2, name="Admin", email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def users_repo(employee, admin) -> InMemoryUsers:
    return InMemoryUsers([employee, admin])


@pytest.fixture
def timelog_repo(users_repo) -> InMemoryTimeLog:
    return InMemoryTimeLog(users_repo)


@pytest.fixture
def make_user():
    def _make(user_id: int, status: UserStatus = UserStatus.OFFLINE, break_start: Optional[datetime] = None) -> User:
        return User(
            user_id=user_id,
            name=f"user{user_id}",
            email=f"user{user_id}@example.com",
            role=Role.USER,
            status=status,
            break_start_time=break_start,
        )

    return _make
