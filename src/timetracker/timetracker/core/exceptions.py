from __future__ import annotations

from .enums import Action, UserStatus


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidTransition(ValidationError):
    """Raised when an action is not allowed from the user's current status."""

    def __init__(self, status: UserStatus, action: Action):
        self.status = status
        self.action = action
        super().__init__(f"Действие {action.value} недоступно в статусе {status.value}")


class BreakCapExceeded(ValidationError):
    """Raised when a new break is requested after the daily limit is used up."""

    def __init__(self, used_seconds: int, cap_seconds: int):
        self.used_seconds = used_seconds
        self.cap_seconds = cap_seconds
        super().__init__(
            f"Дневной лимит перерыва исчерпан ({used_seconds // 60} из {cap_seconds // 60} мин)"
        )


class StorageError(DomainError):
    """Opaque failure from the user/log store. Not retried by the core."""


class StaleSnapshotError(StorageError):
    """The user row changed between read and write (lost compare-and-swap)."""
