from __future__ import annotations

from typing import Optional

from sqlmodel import Session

from schedule_server.models import EventSettings
from schedule_server.repositories.base import GenericRepository
from schedule_server.repositories.specification import field


class EventSettingsRepository(GenericRepository[EventSettings]):
    def __init__(self, session: Session):
        super().__init__(EventSettings, session)

    def get_by_user_id(self, user_id: int) -> Optional[EventSettings]:
        return self.first(field("user_id") == user_id)

    def user_has_settings(self, user_id: int) -> bool:
        return self.any(field("user_id") == user_id)
