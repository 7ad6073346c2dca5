from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role, UserStatus


@dataclass(frozen=True)
class User:
    """Снимок (snapshot) сотрудника на момент чтения.

    Примечание: это чистый объект данных (без доступа к БД); ядро возвращает новый
    снимок вместо изменения хранилища.
    ``break_start_time`` is set if and only if ``status`` is ON_BREAK.
    """

    user_id: int
    name: str
    email: str
    role: Role
    status: UserStatus = UserStatus.OFFLINE
    break_start_time: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
