from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field

from .base import BaseFields
from .types import UTCDateTime

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class Event(BaseFields, table=True):
    """Scheduled event."""

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(
            "start_date_time IS NULL OR end_date_time IS NULL "
            "OR end_date_time > start_date_time",
            name="ck_events_end_after_start",
        ),
    )

    event_type_id: Optional[int] = Field(
        default=None,
        foreign_key="event_types.id",
        nullable=True,
        index=True,
        ondelete="SET NULL",
    )
    created_by_id: Optional[int] = Field(
        default=None,
        foreign_key="users.id",
        nullable=True,
        index=True,
        ondelete="SET NULL",
    )
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    can_be_postponed: bool = Field(default=True)
    is_completed: bool = Field(default=False)
    start_date_time: Optional[datetime] = Field(
        default=None, sa_type=UTCDateTime, index=True
    )
    end_date_time: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
