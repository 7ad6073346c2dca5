from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass
from typing import Iterable

from ..core.enums import UserStatus
from ..users.model import User


@dataclass(frozen=True)
class StatsCounts:
    total_users: int
    working_users: int
    on_break_users: int
    offline_users: int

    def to_dict(self) -> dict:
        return asdict(self)


def reduce_stats(users: Iterable[User]) -> StatsCounts:
    """Partition count over status; total always equals the sum of the parts."""
    counts = Counter(u.status for u in users)
    working = counts[UserStatus.WORKING]
    on_break = counts[UserStatus.ON_BREAK]
    offline = counts[UserStatus.OFFLINE]
    return StatsCounts(
        total_users=working + on_break + offline,
        working_users=working,
        on_break_users=on_break,
        offline_users=offline,
    )
