from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_BREAK_CAP_SECONDS
from ..core.enums import UserStatus


def can_start_break(status: UserStatus, daily_break_seconds: int, cap: int) -> bool:
    return status == UserStatus.WORKING and daily_break_seconds < cap


def is_exceeded(daily_break_seconds: int, cap: int) -> bool:
    """Display/warning only: ending a break is never blocked by the cap."""
    return daily_break_seconds >= cap


@dataclass(frozen=True)
class BreakPolicy:
    """Daily break limit carried by the service (configured via BREAK_CAP_SECONDS)."""

    cap_seconds: int = DEFAULT_BREAK_CAP_SECONDS

    def can_start_break(self, status: UserStatus, daily_break_seconds: int) -> bool:
        return can_start_break(status, daily_break_seconds, self.cap_seconds)

    def is_exceeded(self, daily_break_seconds: int) -> bool:
        return is_exceeded(daily_break_seconds, self.cap_seconds)

    def remaining_seconds(self, daily_break_seconds: int) -> int:
        return max(self.cap_seconds - daily_break_seconds, 0)

    def excess_seconds(self, daily_break_seconds: int) -> int:
        return max(daily_break_seconds - self.cap_seconds, 0)
