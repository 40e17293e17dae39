from __future__ import annotations

from fastapi import APIRouter, status

from schedule_server.api.deps import ActiveUser
from schedule_server.db import SessionDep
from schedule_server.models import EventSettings
from schedule_server.schemas import (
    EventSettingsCreate,
    EventSettingsRead,
    EventSettingsUpdate,
)
from schedule_server.services.event_settings import EventSettingsService

router = APIRouter()


@router.get("/", response_model=EventSettingsRead, summary="Get my event settings")
def get_event_settings(session: SessionDep, user_id: ActiveUser) -> EventSettings:
    return EventSettingsService(session).get(user_id)


@router.post(
    "/",
    response_model=EventSettingsRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create my event settings",
)
def create_event_settings(
    payload: EventSettingsCreate, session: SessionDep, user_id: ActiveUser
) -> EventSettings:
    return EventSettingsService(session).create(user_id, payload.follow_up_period_days)


@router.put("/", response_model=EventSettingsRead, summary="Update my event settings")
def update_event_settings(
    payload: EventSettingsUpdate, session: SessionDep, user_id: ActiveUser
) -> EventSettings:
    return EventSettingsService(session).update(user_id, payload.follow_up_period_days)


@router.delete(
    "/", status_code=status.HTTP_204_NO_CONTENT, summary="Delete my event settings"
)
def delete_event_settings(session: SessionDep, user_id: ActiveUser) -> None:
    EventSettingsService(session).delete(user_id)
