from __future__ import annotations

from typing import Optional

from sqlmodel import Session

from schedule_server.models import EventType
from schedule_server.repositories.base import GenericRepository
from schedule_server.repositories.specification import field


class EventTypeRepository(GenericRepository[EventType]):
    def __init__(self, session: Session):
        super().__init__(EventType, session)

    def get_by_name(self, name: str) -> Optional[EventType]:
        return self.first(field("name") == name)

    def event_type_name_exists(self, name: str) -> bool:
        return self.any(field("name") == name)
