from datetime import datetime, timezone

from src.timetracker.timetracker.core.enums import UserStatus
from src.timetracker.timetracker.tracking.stats import reduce_stats


def test_empty_user_list():
    stats = reduce_stats([])
    assert stats.to_dict() == {"total_users": 0, "working_users": 0, "on_break_users": 0, "offline_users": 0}


def test_partition_counts(make_user):
    t0 = datetime(2026, 2, 2, 5, 0, tzinfo=timezone.utc)
    users = [
        make_user(1, UserStatus.WORKING),
        make_user(2, UserStatus.WORKING),
        make_user(3, UserStatus.ON_BREAK, t0),
        make_user(4, UserStatus.OFFLINE),
        make_user(5, UserStatus.OFFLINE),
        make_user(6, UserStatus.OFFLINE),
    ]

    stats = reduce_stats(users)

    assert stats.working_users == 2
    assert stats.on_break_users == 1
    assert stats.offline_users == 3
    assert stats.total_users == stats.working_users + stats.on_break_users + stats.offline_users == 6


def test_accepts_any_iterable(make_user):
    stats = reduce_stats(make_user(i, UserStatus.OFFLINE) for i in range(4))
    assert stats.total_users == 4
    assert stats.offline_users == 4
