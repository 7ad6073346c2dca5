from __future__ import annotations

from datetime import timedelta
from itertools import product

import pytest

from src.timetracker.timetracker.core.enums import Action, UserStatus
from src.timetracker.timetracker.core.exceptions import InvalidTransition
from src.timetracker.timetracker.tracking.state_machine import TRANSITIONS, allowed_actions, apply_action

VALID = {
    (UserStatus.OFFLINE, Action.START_WORK): UserStatus.WORKING,
    (UserStatus.WORKING, Action.START_BREAK): UserStatus.ON_BREAK,
    (UserStatus.ON_BREAK, Action.END_BREAK): UserStatus.WORKING,
    (UserStatus.WORKING, Action.END_WORK): UserStatus.OFFLINE,
}
INVALID = [pair for pair in product(UserStatus, Action) if pair not in VALID]


def test_transition_table_matches_expected():
    assert dict(TRANSITIONS) == VALID


@pytest.mark.parametrize("status,action", list(VALID))
def test_valid_pairs_yield_next_status(make_user, fixed_now, status, action):
    break_start = fixed_now - timedelta(minutes=5) if status == UserStatus.ON_BREAK else None
    user = make_user(1, status, break_start)

    t = apply_action(user, action, fixed_now)

    assert t.next_user.status == VALID[(status, action)]
    assert t.event.action == action
    assert t.event.timestamp == fixed_now
    assert t.event.user_id == 1
    # break_start_time is set iff on_break
    assert (t.next_user.break_start_time is not None) == (t.next_user.status == UserStatus.ON_BREAK)


@pytest.mark.parametrize("status,action", INVALID)
def test_invalid_pairs_raise(make_user, fixed_now, status, action):
    user = make_user(1, status, fixed_now if status == UserStatus.ON_BREAK else None)

    with pytest.raises(InvalidTransition) as exc:
        apply_action(user, action, fixed_now)

    assert exc.value.status == status
    assert exc.value.action == action


def test_start_break_stamps_break_start(make_user, fixed_now):
    t = apply_action(make_user(1, UserStatus.WORKING), Action.START_BREAK, fixed_now)
    assert t.next_user.break_start_time == fixed_now


def test_end_break_clears_break_start(make_user, fixed_now):
    user = make_user(1, UserStatus.ON_BREAK, fixed_now - timedelta(minutes=10))
    t = apply_action(user, Action.END_BREAK, fixed_now)
    assert t.next_user.break_start_time is None


def test_input_snapshot_is_not_mutated(make_user, fixed_now):
    user = make_user(1, UserStatus.OFFLINE)
    apply_action(user, Action.START_WORK, fixed_now)
    assert user.status == UserStatus.OFFLINE


def test_end_work_from_break_is_rejected(make_user, fixed_now):
    user = make_user(1, UserStatus.ON_BREAK, fixed_now)
    with pytest.raises(InvalidTransition):
        apply_action(user, Action.END_WORK, fixed_now)


def test_allowed_actions():
    assert allowed_actions(UserStatus.OFFLINE) == [Action.START_WORK]
    assert set(allowed_actions(UserStatus.WORKING)) == {Action.START_BREAK, Action.END_WORK}
    assert allowed_actions(UserStatus.ON_BREAK) == [Action.END_BREAK]
