from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import UserStatus
from .model import User


class UserRepository(Protocol):
    """Repository interface for User snapshots.

    Note (DIP): services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def update_status(
        self,
        user_id: int,
        *,
        status: UserStatus,
        break_start_time: Optional[datetime],
        updated_at: datetime,
        expected_updated_at: Optional[datetime],
    ) -> bool:
        """Compare-and-swap on ``updated_at``.

        Returns False when the row was changed by someone else since it was read.
        """

        raise NotImplementedError
