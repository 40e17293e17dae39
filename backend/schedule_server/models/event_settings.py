from __future__ import annotations

from sqlmodel import Field

from .base import BaseFields


class EventSettings(BaseFields, table=True):
    """Per-user event preferences."""

    __tablename__ = "event_settings"

    user_id: int = Field(
        foreign_key="users.id",
        nullable=False,
        unique=True,
        index=True,
        ondelete="CASCADE",
    )
    follow_up_period_days: int = Field(nullable=False)
