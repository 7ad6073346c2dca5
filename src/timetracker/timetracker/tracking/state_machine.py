from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional

from ..common.datetime_utils import ensure_aware
from ..core.enums import Action, UserStatus
from ..core.exceptions import InvalidTransition
from ..timelog.model import TimeLogEvent
from ..users.model import User

# (current status, action) -> next status. Pairs not listed are rejected.
TRANSITIONS: Mapping[tuple[UserStatus, Action], UserStatus] = MappingProxyType(
    {
        (UserStatus.OFFLINE, Action.START_WORK): UserStatus.WORKING,
        (UserStatus.WORKING, Action.START_BREAK): UserStatus.ON_BREAK,
        (UserStatus.ON_BREAK, Action.END_BREAK): UserStatus.WORKING,
        (UserStatus.WORKING, Action.END_WORK): UserStatus.OFFLINE,
    }
)


@dataclass(frozen=True)
class Transition:
    next_user: User
    event: TimeLogEvent


def allowed_actions(status: UserStatus) -> list[Action]:
    return [action for (current, action) in TRANSITIONS if current == status]


def next_status(status: UserStatus, action: Action) -> UserStatus:
    try:
        return TRANSITIONS[(status, action)]
    except KeyError:
        raise InvalidTransition(status, action) from None


def apply_action(user: User, action: Action, now: datetime) -> Transition:
    """Validate ``action`` against the user's status and build the next snapshot.

    Pure: nothing is read from or written to storage. The break-cap check for
    START_BREAK is the caller's job (see break_policy).
    """
    now = ensure_aware(now)
    status = next_status(user.status, action)

    break_start: Optional[datetime] = now if status == UserStatus.ON_BREAK else None
    next_user = replace(user, status=status, break_start_time=break_start, updated_at=now)
    event = TimeLogEvent(user_id=user.user_id, action=action, timestamp=now)
    return Transition(next_user=next_user, event=event)
