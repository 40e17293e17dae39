"""
Event lifecycle: CRUD, filters, attendance and the postpone / reject /
complete / follow-up transitions, single and bulk.

Bulk operations run item by item in input order. Every item commits on its
own; a failing item is rolled back, recorded in the result and the batch
moves on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from schedule_server.core.config import settings
from schedule_server.core.exceptions import (
    ApplicationError,
    ConstraintViolation,
    Forbidden,
    InvalidArgument,
    NotFound,
    NotPostponable,
)
from schedule_server.models import Event, EventType, UserEvent, as_utc
from schedule_server.repositories import (
    EventRepository,
    EventSettingsRepository,
    EventTypeRepository,
    UserEventRepository,
    commit_or_raise,
)
from schedule_server.schemas import (
    EventCreate,
    EventCreateWithUser,
    EventTypeCreate,
    EventTypeUpdate,
    EventUpdate,
)
from schedule_server.services.validation import ensure_valid, validate_event_fields

logger = logging.getLogger(__name__)


@dataclass
class BulkFailure:
    event_id: int
    reason: str
    message: str


@dataclass
class BulkResult:
    succeeded: List[int] = field(default_factory=list)
    failed: List[BulkFailure] = field(default_factory=list)


class EventLifecycleService:
    def __init__(self, session: Session):
        self.session = session
        self.events = EventRepository(session)
        self.event_types = EventTypeRepository(session)
        self.user_events = UserEventRepository(session)
        self.event_settings = EventSettingsRepository(session)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def list_created_by(self, user_id: int) -> List[Event]:
        return self.events.get_events_created_by(user_id)

    def get_owned(self, event_id: int, user_id: int) -> Event:
        """Event ``event_id`` if ``user_id`` created it; NotFound otherwise."""
        event = self.events.get_by_id(event_id)
        if event is None or event.created_by_id != user_id:
            raise NotFound("Event", event_id)
        return event

    def create(self, payload: EventCreate, user_id: int) -> Event:
        ensure_valid(
            validate_event_fields(
                payload.title,
                payload.description,
                payload.start_date_time,
                payload.end_date_time,
            )
        )
        event = Event(**payload.model_dump(), created_by_id=user_id)
        event = self.events.add(event)
        logger.info(f"User {user_id} created event {event.id}")
        return event

    def create_with_user(self, payload: EventCreateWithUser, user_id: int) -> Event:
        """Create the event and its attendance link in one transaction."""
        ensure_valid(
            validate_event_fields(
                payload.title,
                payload.description,
                payload.start_date_time,
                payload.end_date_time,
            )
        )
        event = Event(**payload.model_dump(exclude={"user_id"}), created_by_id=user_id)
        self.events.add(event, commit=False)
        self.user_events.add(
            UserEvent(user_id=payload.user_id, event_id=event.id), commit=False
        )
        commit_or_raise(self.session, "Event")
        self.session.refresh(event)
        logger.info(
            f"User {user_id} created event {event.id} for user {payload.user_id}"
        )
        return event

    def update(self, event_id: int, payload: EventUpdate, user_id: int) -> Event:
        event = self.get_owned(event_id, user_id)
        changes = payload.model_dump(exclude_unset=True)
        merged = {
            name: changes.get(name, getattr(event, name))
            for name in ("title", "description", "start_date_time", "end_date_time")
        }
        ensure_valid(validate_event_fields(**merged))
        for name, value in changes.items():
            setattr(event, name, value)
        return self.events.update(event)

    def delete(self, event_id: int, user_id: int) -> None:
        event = self.get_owned(event_id, user_id)
        self.events.delete(event)
        logger.info(f"User {user_id} deleted event {event_id}")

    def get_by_type(self, event_type_id: int) -> List[Event]:
        return self.events.get_events_by_type(event_type_id)

    def get_by_date_range(self, start: datetime, end: datetime) -> List[Event]:
        start, end = as_utc(start), as_utc(end)
        if end < start:
            raise InvalidArgument("end must not be before start.")
        return self.events.get_events_by_date_range(start, end)

    def get_upcoming(self) -> List[Event]:
        return self.events.get_upcoming_events()

    def get_completed(self) -> List[Event]:
        return self.events.get_completed_events()

    def get_attended_by(self, user_id: int) -> List[Event]:
        return self.events.get_events_by_user(user_id)

    # ------------------------------------------------------------------
    # Single transitions
    # ------------------------------------------------------------------

    def complete(self, event_id: int, is_completed: bool = True) -> Event:
        event = self.events.get_required(event_id)
        event.is_completed = is_completed
        return self.events.update(event)

    def toggle_completion(self, event_id: int) -> Event:
        event = self.events.get_required(event_id)
        return self.complete(event_id, not event.is_completed)

    def postpone(self, event_id: int, user_id: int) -> Event:
        event = self._require_created_by(event_id, user_id)
        if not event.can_be_postponed:
            raise NotPostponable(event_id)
        self._require_dates(event)

        shift = timedelta(days=settings.POSTPONE_SHIFT_DAYS)
        event.start_date_time = event.start_date_time + shift
        event.end_date_time = event.end_date_time + shift
        event = self.events.update(event)
        logger.info(f"User {user_id} postponed event {event_id}")
        return event

    def reject(self, event_id: int, user_id: int) -> None:
        """Drop the actor's attendance link; the event itself stays."""
        self.events.get_required(event_id)
        if not self.user_events.remove_user_event(user_id, event_id):
            raise NotFound(
                "UserEvent",
                event_id,
                f"User {user_id} is not linked to event {event_id}.",
            )
        logger.info(f"User {user_id} rejected event {event_id}")

    def follow_up(self, event_id: int, user_id: int) -> Event:
        source = self._require_created_by(event_id, user_id)
        self._require_dates(source)

        shift = timedelta(days=self.follow_up_period_days(user_id))
        follow_up = Event(
            event_type_id=source.event_type_id,
            created_by_id=user_id,
            title=source.title,
            description=source.description,
            can_be_postponed=source.can_be_postponed,
            is_completed=False,
            start_date_time=source.start_date_time + shift,
            end_date_time=source.end_date_time + shift,
        )
        self.events.add(follow_up, commit=False)
        self.user_events.add(
            UserEvent(user_id=user_id, event_id=follow_up.id), commit=False
        )
        commit_or_raise(self.session, "Event")
        self.session.refresh(follow_up)
        logger.info(
            f"User {user_id} created follow-up {follow_up.id} of event {event_id}"
        )
        return follow_up

    def follow_up_period_days(self, user_id: int) -> int:
        user_settings = self.event_settings.get_by_user_id(user_id)
        if user_settings is None:
            return settings.DEFAULT_FOLLOW_UP_PERIOD_DAYS
        return user_settings.follow_up_period_days

    # ------------------------------------------------------------------
    # Bulk transitions
    # ------------------------------------------------------------------

    def bulk_postpone(self, event_ids: Sequence[int], user_id: int) -> BulkResult:
        return self._run_bulk("postpone", event_ids, lambda eid: self.postpone(eid, user_id))

    def bulk_reject(self, event_ids: Sequence[int], user_id: int) -> BulkResult:
        return self._run_bulk("reject", event_ids, lambda eid: self.reject(eid, user_id))

    def bulk_complete(self, event_ids: Sequence[int], user_id: int) -> BulkResult:
        return self._run_bulk("complete", event_ids, self.complete)

    def bulk_follow_up(self, event_ids: Sequence[int], user_id: int) -> BulkResult:
        return self._run_bulk(
            "follow-up", event_ids, lambda eid: self.follow_up(eid, user_id)
        )

    def _run_bulk(
        self, action: str, event_ids: Sequence[int], apply: Callable[[int], object]
    ) -> BulkResult:
        result = BulkResult()
        for event_id in event_ids:
            try:
                apply(event_id)
            except ApplicationError as exc:
                self.session.rollback()
                result.failed.append(BulkFailure(event_id, exc.code, exc.message))
            except SQLAlchemyError as exc:
                self.session.rollback()
                logger.exception(f"Database error during bulk {action} of event {event_id}")
                result.failed.append(BulkFailure(event_id, "DatabaseError", str(exc)))
            else:
                result.succeeded.append(event_id)

        logger.info(
            f"Bulk {action}: {len(result.succeeded)} succeeded, "
            f"{len(result.failed)} failed"
        )
        return result

    def _require_created_by(self, event_id: int, user_id: int) -> Event:
        event = self.events.get_required(event_id)
        if event.created_by_id != user_id:
            raise Forbidden(f"Event with ID {event_id} was not created by user {user_id}.")
        return event

    @staticmethod
    def _require_dates(event: Event) -> None:
        if event.start_date_time is None or event.end_date_time is None:
            raise InvalidArgument(
                f"Event with ID {event.id} has no start or end time."
            )

    # ------------------------------------------------------------------
    # Event types
    # ------------------------------------------------------------------

    def list_event_types(self) -> List[EventType]:
        return self.event_types.get_all()

    def get_event_type(self, event_type_id: int) -> EventType:
        return self.event_types.get_required(event_type_id)

    def create_event_type(self, payload: EventTypeCreate) -> EventType:
        if self.event_types.event_type_name_exists(payload.name):
            raise ConstraintViolation(
                "EventType", "name", f"Event type '{payload.name}' already exists."
            )
        return self.event_types.add(EventType(name=payload.name))

    def update_event_type(self, event_type_id: int, payload: EventTypeUpdate) -> EventType:
        event_type = self.event_types.get_required(event_type_id)
        existing = self.event_types.get_by_name(payload.name)
        if existing is not None and existing.id != event_type_id:
            raise ConstraintViolation(
                "EventType", "name", f"Event type '{payload.name}' already exists."
            )
        event_type.name = payload.name
        return self.event_types.update(event_type)

    def delete_event_type(self, event_type_id: int) -> None:
        self.event_types.delete(self.event_types.get_required(event_type_id))

    # ------------------------------------------------------------------
    # Attendance
    # ------------------------------------------------------------------

    def list_user_events(self, user_id: int) -> List[UserEvent]:
        return self.user_events.get_user_events_by_user_id(user_id)

    def list_event_users(self, event_id: int) -> List[UserEvent]:
        self.events.get_required(event_id)
        return self.user_events.get_user_events_by_event_id(event_id)

    def add_user_event(self, user_id: int, event_id: int) -> UserEvent:
        if self.user_events.user_has_event(user_id, event_id):
            raise ConstraintViolation(
                "UserEvent",
                "user_id, event_id",
                f"User {user_id} is already linked to event {event_id}.",
            )
        return self.user_events.add(UserEvent(user_id=user_id, event_id=event_id))

    def remove_user_event(self, user_id: int, event_id: int) -> None:
        if not self.user_events.remove_user_event(user_id, event_id):
            raise NotFound(
                "UserEvent",
                event_id,
                f"User {user_id} is not linked to event {event_id}.",
            )

    def user_event_exists(self, user_id: int, event_id: int) -> bool:
        return self.user_events.user_has_event(user_id, event_id)

