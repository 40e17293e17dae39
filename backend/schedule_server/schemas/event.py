from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schedule_server.models.types import as_utc


class EventTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class EventTypeUpdate(EventTypeCreate):
    pass


class EventTypeRead(EventTypeCreate):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventBase(BaseModel):
    # Length and date rules are checked together in services.validation
    title: str
    description: Optional[str] = None
    event_type_id: Optional[int] = None
    can_be_postponed: bool = True
    start_date_time: Optional[datetime] = None
    end_date_time: Optional[datetime] = None

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def normalize_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class EventCreate(EventBase):
    pass


class EventCreateWithUser(EventBase):
    """Create an event and link ``user_id`` to it as an attendee."""

    user_id: int


class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    event_type_id: Optional[int] = None
    can_be_postponed: Optional[bool] = None
    is_completed: Optional[bool] = None
    start_date_time: Optional[datetime] = None
    end_date_time: Optional[datetime] = None

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def normalize_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class EventRead(EventBase):
    id: int
    is_completed: bool
    created_by_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventIdsRequest(BaseModel):
    event_ids: List[int]


class BulkFailureRead(BaseModel):
    event_id: int
    reason: str
    message: str

    model_config = ConfigDict(from_attributes=True)


class BulkResultRead(BaseModel):
    succeeded: List[int]
    failed: List[BulkFailureRead]

    model_config = ConfigDict(from_attributes=True)


class UserEventCreate(BaseModel):
    user_id: int
    event_id: int


class UserEventRead(UserEventCreate):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventSettingsCreate(BaseModel):
    follow_up_period_days: int


class EventSettingsUpdate(EventSettingsCreate):
    pass


class EventSettingsRead(EventSettingsCreate):
    id: int
    user_id: int
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
