from __future__ import annotations

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from .base import BaseFields


class UserEvent(BaseFields, table=True):
    """Attendance / ownership link between a user and an event."""

    __tablename__ = "user_events"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_user_events_user_id_event_id"),
    )

    user_id: int = Field(
        foreign_key="users.id", nullable=False, index=True, ondelete="CASCADE"
    )
    event_id: int = Field(
        foreign_key="events.id", nullable=False, index=True, ondelete="CASCADE"
    )
