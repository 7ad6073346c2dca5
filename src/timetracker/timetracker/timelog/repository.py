from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import DayWindow, TimeLogEntry, TimeLogEvent


class TimeLogRepository(Protocol):
    """Append-only event log store.

    Implementations never update or delete rows; failures surface as StorageError.
    """

    def fetch_events(self, user_id: int, window: DayWindow) -> Sequence[TimeLogEvent]:
        """Events of one user inside the window, oldest first."""

        raise NotImplementedError

    def last_event_before(self, user_id: int, moment: datetime) -> Optional[TimeLogEvent]:
        """Latest event of the user strictly before ``moment``, or None."""

        raise NotImplementedError

    def append_event(self, event: TimeLogEvent) -> int:
        raise NotImplementedError

    def list_recent(self, window: DayWindow, *, user_id: Optional[int] = None) -> Sequence[TimeLogEntry]:
        """Events inside the window joined with user info, newest first."""

        raise NotImplementedError
