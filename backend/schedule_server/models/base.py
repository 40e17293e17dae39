from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from .types import UTCDateTime


def utcnow() -> datetime:
    """Aware UTC timestamp, the form every datetime column holds."""
    return datetime.now(timezone.utc)


class BaseFields(SQLModel):
    """Identity and audit timestamps shared by every table."""

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow, sa_type=UTCDateTime, nullable=False
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_type=UTCDateTime, nullable=False
    )

    def touch(self) -> None:
        self.updated_at = utcnow()
