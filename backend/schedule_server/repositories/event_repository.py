from __future__ import annotations

from datetime import datetime, timedelta
from typing import List

from sqlmodel import Session, select

from schedule_server.core.config import settings
from schedule_server.core.exceptions import ConstraintViolation
from schedule_server.models import Event, UserEvent, as_utc, utcnow
from schedule_server.models.event import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from schedule_server.repositories.base import GenericRepository
from schedule_server.repositories.specification import field


class EventRepository(GenericRepository[Event]):
    def __init__(self, session: Session):
        super().__init__(Event, session)

    def validate_entity(self, entity: Event) -> None:
        title = (entity.title or "").strip()
        if not title or len(entity.title) > TITLE_MAX_LENGTH:
            raise ConstraintViolation(
                self.resource,
                "title",
                f"Title must be between 1 and {TITLE_MAX_LENGTH} characters.",
            )
        if entity.description is not None and len(entity.description) > DESCRIPTION_MAX_LENGTH:
            raise ConstraintViolation(
                self.resource,
                "description",
                f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters.",
            )

        start, end = as_utc(entity.start_date_time), as_utc(entity.end_date_time)
        if start is None or end is None:
            return
        if end <= start:
            raise ConstraintViolation(
                self.resource, "end_date_time", "End time must be after start time."
            )
        if end - start > timedelta(hours=settings.MAX_EVENT_DURATION_HOURS):
            raise ConstraintViolation(
                self.resource,
                "end_date_time",
                f"Event duration cannot exceed {settings.MAX_EVENT_DURATION_HOURS} hours.",
            )

    def get_events_by_type(self, event_type_id: int) -> List[Event]:
        return self.find(field("event_type_id") == event_type_id)

    def get_events_by_date_range(self, start: datetime, end: datetime) -> List[Event]:
        """Events starting inside ``[start, end]``."""
        start, end = as_utc(start), as_utc(end)
        return self.find(
            (field("start_date_time") >= start) & (field("start_date_time") <= end)
        )

    def get_upcoming_events(self, now: datetime | None = None) -> List[Event]:
        moment = as_utc(now) if now is not None else utcnow()
        return self.find(
            (field("start_date_time") > moment) & (field("is_completed") == False)  # noqa: E712
        )

    def get_completed_events(self) -> List[Event]:
        return self.find(field("is_completed").is_true())

    def get_events_created_by(self, user_id: int) -> List[Event]:
        return self.find(field("created_by_id") == user_id)

    def get_events_by_user(self, user_id: int) -> List[Event]:
        """Events the user is linked to as an attendee."""
        linked = select(UserEvent.event_id).where(UserEvent.user_id == user_id)
        statement = select(Event).where(Event.id.in_(linked)).order_by(Event.id)
        return list(self.session.exec(statement).all())
