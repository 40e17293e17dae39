from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Query, status

from schedule_server.api.deps import ActiveUser
from schedule_server.core.exceptions import InvalidArgument
from schedule_server.db import SessionDep
from schedule_server.models import Event, EventType, UserEvent
from schedule_server.schemas import (
    BulkResultRead,
    EventCreate,
    EventCreateWithUser,
    EventIdsRequest,
    EventRead,
    EventTypeCreate,
    EventTypeRead,
    EventTypeUpdate,
    EventUpdate,
    UserEventCreate,
    UserEventRead,
)
from schedule_server.services.events import BulkResult, EventLifecycleService

router = APIRouter()


def _event_ids(payload: EventIdsRequest) -> List[int]:
    if not payload.event_ids:
        raise InvalidArgument("event_ids must contain at least one id.")
    return payload.event_ids


# Event types


@router.get("/types", response_model=List[EventTypeRead], summary="List event types")
def list_event_types(session: SessionDep, _: ActiveUser) -> List[EventType]:
    return EventLifecycleService(session).list_event_types()


@router.get(
    "/types/{event_type_id}", response_model=EventTypeRead, summary="Get an event type"
)
def get_event_type(event_type_id: int, session: SessionDep, _: ActiveUser) -> EventType:
    return EventLifecycleService(session).get_event_type(event_type_id)


@router.post(
    "/types",
    response_model=EventTypeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event type",
)
def create_event_type(
    payload: EventTypeCreate, session: SessionDep, _: ActiveUser
) -> EventType:
    return EventLifecycleService(session).create_event_type(payload)


@router.put(
    "/types/{event_type_id}", response_model=EventTypeRead, summary="Rename an event type"
)
def update_event_type(
    event_type_id: int, payload: EventTypeUpdate, session: SessionDep, _: ActiveUser
) -> EventType:
    return EventLifecycleService(session).update_event_type(event_type_id, payload)


@router.delete(
    "/types/{event_type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an event type",
)
def delete_event_type(event_type_id: int, session: SessionDep, _: ActiveUser) -> None:
    EventLifecycleService(session).delete_event_type(event_type_id)


# Bulk transitions


@router.put("/postpone", response_model=BulkResultRead, summary="Postpone events")
def bulk_postpone(
    payload: EventIdsRequest, session: SessionDep, user_id: ActiveUser
) -> BulkResult:
    return EventLifecycleService(session).bulk_postpone(_event_ids(payload), user_id)


@router.put("/reject", response_model=BulkResultRead, summary="Reject events")
def bulk_reject(
    payload: EventIdsRequest, session: SessionDep, user_id: ActiveUser
) -> BulkResult:
    return EventLifecycleService(session).bulk_reject(_event_ids(payload), user_id)


@router.put("/complete", response_model=BulkResultRead, summary="Complete events")
def bulk_complete(
    payload: EventIdsRequest, session: SessionDep, user_id: ActiveUser
) -> BulkResult:
    return EventLifecycleService(session).bulk_complete(_event_ids(payload), user_id)


@router.put(
    "/follow-up", response_model=BulkResultRead, summary="Create follow-up events"
)
def bulk_follow_up(
    payload: EventIdsRequest, session: SessionDep, user_id: ActiveUser
) -> BulkResult:
    return EventLifecycleService(session).bulk_follow_up(_event_ids(payload), user_id)


# Filters


@router.get(
    "/type/{event_type_id}", response_model=List[EventRead], summary="Events of a type"
)
def get_events_by_type(
    event_type_id: int, session: SessionDep, _: ActiveUser
) -> List[Event]:
    return EventLifecycleService(session).get_by_type(event_type_id)


@router.get(
    "/date-range",
    response_model=List[EventRead],
    summary="Events starting within a range",
)
def get_events_by_date_range(
    session: SessionDep,
    _: ActiveUser,
    start: datetime = Query(...),
    end: datetime = Query(...),
) -> List[Event]:
    return EventLifecycleService(session).get_by_date_range(start, end)


@router.get("/upcoming", response_model=List[EventRead], summary="Upcoming events")
def get_upcoming_events(session: SessionDep, _: ActiveUser) -> List[Event]:
    return EventLifecycleService(session).get_upcoming()


@router.get("/completed", response_model=List[EventRead], summary="Completed events")
def get_completed_events(session: SessionDep, _: ActiveUser) -> List[Event]:
    return EventLifecycleService(session).get_completed()


@router.get(
    "/user/{user_id}", response_model=List[EventRead], summary="Events a user attends"
)
def get_events_by_user(user_id: int, session: SessionDep, _: ActiveUser) -> List[Event]:
    return EventLifecycleService(session).get_attended_by(user_id)


# Attendance


@router.get(
    "/users/{user_id}",
    response_model=List[UserEventRead],
    summary="Attendance links of a user",
)
def list_user_events(
    user_id: int, session: SessionDep, _: ActiveUser
) -> List[UserEvent]:
    return EventLifecycleService(session).list_user_events(user_id)


@router.post(
    "/users",
    response_model=UserEventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Link a user to an event",
)
def add_user_event(
    payload: UserEventCreate, session: SessionDep, _: ActiveUser
) -> UserEvent:
    return EventLifecycleService(session).add_user_event(payload.user_id, payload.event_id)


@router.get(
    "/users/{user_id}/{event_id}/exists", summary="Whether a user is linked to an event"
)
def user_event_exists(
    user_id: int, event_id: int, session: SessionDep, _: ActiveUser
) -> dict[str, bool]:
    exists = EventLifecycleService(session).user_event_exists(user_id, event_id)
    return {"exists": exists}


@router.delete(
    "/users/{user_id}/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unlink a user from an event",
)
def remove_user_event(
    user_id: int, event_id: int, session: SessionDep, _: ActiveUser
) -> None:
    EventLifecycleService(session).remove_user_event(user_id, event_id)


# Events


@router.get("/", response_model=List[EventRead], summary="Events created by me")
def list_events(session: SessionDep, user_id: ActiveUser) -> List[Event]:
    return EventLifecycleService(session).list_created_by(user_id)


@router.post(
    "/",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event",
)
def create_event(payload: EventCreate, session: SessionDep, user_id: ActiveUser) -> Event:
    return EventLifecycleService(session).create(payload, user_id)


@router.post(
    "/with-user",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event and link an attendee",
)
def create_event_with_user(
    payload: EventCreateWithUser, session: SessionDep, user_id: ActiveUser
) -> Event:
    return EventLifecycleService(session).create_with_user(payload, user_id)


@router.get("/{event_id}", response_model=EventRead, summary="Get one of my events")
def get_event(event_id: int, session: SessionDep, user_id: ActiveUser) -> Event:
    return EventLifecycleService(session).get_owned(event_id, user_id)


@router.patch("/{event_id}", response_model=EventRead, summary="Update an event")
def update_event(
    event_id: int, payload: EventUpdate, session: SessionDep, user_id: ActiveUser
) -> Event:
    return EventLifecycleService(session).update(event_id, payload, user_id)


@router.delete(
    "/{event_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an event"
)
def delete_event(event_id: int, session: SessionDep, user_id: ActiveUser) -> None:
    EventLifecycleService(session).delete(event_id, user_id)


@router.get(
    "/{event_id}/users",
    response_model=List[UserEventRead],
    summary="Attendance links of an event",
)
def list_event_users(
    event_id: int, session: SessionDep, _: ActiveUser
) -> List[UserEvent]:
    return EventLifecycleService(session).list_event_users(event_id)


# Single transitions


@router.put(
    "/{event_id}/postpone", response_model=EventRead, summary="Postpone an event"
)
def postpone_event(event_id: int, session: SessionDep, user_id: ActiveUser) -> Event:
    return EventLifecycleService(session).postpone(event_id, user_id)


@router.put(
    "/{event_id}/reject",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reject an event",
)
def reject_event(event_id: int, session: SessionDep, user_id: ActiveUser) -> None:
    EventLifecycleService(session).reject(event_id, user_id)


@router.put(
    "/{event_id}/follow-up",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a follow-up event",
)
def follow_up_event(event_id: int, session: SessionDep, user_id: ActiveUser) -> Event:
    return EventLifecycleService(session).follow_up(event_id, user_id)


@router.put(
    "/{event_id}/toggle-completion",
    response_model=EventRead,
    summary="Flip an event's completion flag",
)
def toggle_event_completion(
    event_id: int, session: SessionDep, _: ActiveUser
) -> Event:
    return EventLifecycleService(session).toggle_completion(event_id)
