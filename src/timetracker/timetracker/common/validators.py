from __future__ import annotations

from ..core.enums import Action, LogPeriod
from ..core.exceptions import ValidationError


def parse_action(value: str) -> Action:
    try:
        return Action((value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Неизвестное действие: {value!r}") from None


def parse_period(value: str | None, default: LogPeriod = LogPeriod.DAY) -> LogPeriod:
    if not value:
        return default
    try:
        return LogPeriod(value.strip().lower())
    except ValueError:
        raise ValidationError(f"Неизвестный период: {value!r}") from None
