from __future__ import annotations

from typing import List, Optional

from sqlmodel import Session

from schedule_server.models import UserEvent
from schedule_server.repositories.base import GenericRepository
from schedule_server.repositories.specification import field


class UserEventRepository(GenericRepository[UserEvent]):
    def __init__(self, session: Session):
        super().__init__(UserEvent, session)

    def get_user_events_by_user_id(self, user_id: int) -> List[UserEvent]:
        return self.find(field("user_id") == user_id)

    def get_user_events_by_event_id(self, event_id: int) -> List[UserEvent]:
        return self.find(field("event_id") == event_id)

    def get_user_event(self, user_id: int, event_id: int) -> Optional[UserEvent]:
        return self.first((field("user_id") == user_id) & (field("event_id") == event_id))

    def user_has_event(self, user_id: int, event_id: int) -> bool:
        return self.any((field("user_id") == user_id) & (field("event_id") == event_id))

    def remove_user_event(self, user_id: int, event_id: int, *, commit: bool = True) -> bool:
        user_event = self.get_user_event(user_id, event_id)
        if user_event is None:
            return False
        self.delete(user_event, commit=commit)
        return True
