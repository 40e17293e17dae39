from __future__ import annotations

from sqlmodel import Field

from .base import BaseFields


class EventType(BaseFields, table=True):
    """Category for events."""

    __tablename__ = "event_types"

    name: str = Field(index=True, unique=True, max_length=100)
