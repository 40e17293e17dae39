"""Column types shared by the table models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.types import DateTime, TypeDecorator


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware UTC form of ``value``; naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime normalized to UTC.

    Backends that drop the offset on storage (SQLite) get UTC re-attached on
    load, so every value read back compares cleanly with ``utcnow()``.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect):
        if isinstance(value, datetime):
            return as_utc(value)
        return value

    def process_result_value(self, value: Any, dialect):
        if isinstance(value, datetime):
            return as_utc(value)
        return value
