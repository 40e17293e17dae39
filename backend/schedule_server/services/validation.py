"""Field rules for incoming event and settings payloads.

Each ``validate_*`` returns every violated rule, never just the first one.
``ensure_valid`` turns a non-empty list into ``ValidationFailed``.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional

from schedule_server.core.config import settings
from schedule_server.core.exceptions import ValidationFailed
from schedule_server.models.event import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from schedule_server.models.types import as_utc


def validate_event_fields(
    title: Optional[str],
    description: Optional[str],
    start_date_time: Optional[datetime],
    end_date_time: Optional[datetime],
) -> List[str]:
    reasons: List[str] = []

    if title is None or not title.strip():
        reasons.append("Title is required.")
    elif len(title) > TITLE_MAX_LENGTH:
        reasons.append(f"Title cannot exceed {TITLE_MAX_LENGTH} characters.")

    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        reasons.append(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters.")

    if start_date_time is not None and end_date_time is not None:
        start_date_time, end_date_time = as_utc(start_date_time), as_utc(end_date_time)
        if end_date_time <= start_date_time:
            reasons.append("End time must be after start time.")
        elif end_date_time - start_date_time > timedelta(
            hours=settings.MAX_EVENT_DURATION_HOURS
        ):
            reasons.append(
                f"Event duration cannot exceed {settings.MAX_EVENT_DURATION_HOURS} hours."
            )

    return reasons


def validate_follow_up_period(days: Optional[int]) -> List[str]:
    if days is None:
        return ["Follow-up period is required."]
    if days <= 0:
        return ["Follow-up period must be greater than 0 days."]
    return []


def ensure_valid(reasons: List[str]) -> None:
    if reasons:
        raise ValidationFailed(reasons)
