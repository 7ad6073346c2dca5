import pytest

from src.timetracker.timetracker.common.validators import parse_action, parse_period
from src.timetracker.timetracker.core.enums import Action, LogPeriod
from src.timetracker.timetracker.core.exceptions import ValidationError


def test_parse_action():
    assert parse_action("start_break") is Action.START_BREAK
    assert parse_action(" END_WORK ") is Action.END_WORK
    with pytest.raises(ValidationError):
        parse_action("nap")


def test_parse_period_defaults_to_day():
    assert parse_period(None) is LogPeriod.DAY
    assert parse_period("") is LogPeriod.DAY
    assert parse_period("Month") is LogPeriod.MONTH
    with pytest.raises(ValidationError):
        parse_period("year")
