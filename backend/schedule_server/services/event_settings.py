from __future__ import annotations

import logging

from sqlmodel import Session

from schedule_server.core.exceptions import ConstraintViolation, NotFound
from schedule_server.models import EventSettings
from schedule_server.repositories import EventSettingsRepository
from schedule_server.services.validation import ensure_valid, validate_follow_up_period

logger = logging.getLogger(__name__)


class EventSettingsService:
    """One settings row per user."""

    def __init__(self, session: Session):
        self.repository = EventSettingsRepository(session)

    def get(self, user_id: int) -> EventSettings:
        user_settings = self.repository.get_by_user_id(user_id)
        if user_settings is None:
            raise NotFound("EventSettings", user_id, f"No event settings for user {user_id}.")
        return user_settings

    def create(self, user_id: int, follow_up_period_days: int) -> EventSettings:
        ensure_valid(validate_follow_up_period(follow_up_period_days))
        if self.repository.user_has_settings(user_id):
            raise ConstraintViolation(
                "EventSettings", "user_id", f"User {user_id} already has event settings."
            )
        created = self.repository.add(
            EventSettings(user_id=user_id, follow_up_period_days=follow_up_period_days)
        )
        logger.info(f"Created event settings for user {user_id}")
        return created

    def update(self, user_id: int, follow_up_period_days: int) -> EventSettings:
        ensure_valid(validate_follow_up_period(follow_up_period_days))
        user_settings = self.get(user_id)
        user_settings.follow_up_period_days = follow_up_period_days
        return self.repository.update(user_settings)

    def delete(self, user_id: int) -> None:
        self.repository.delete(self.get(user_id))
