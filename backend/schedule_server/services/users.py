from __future__ import annotations

import logging
from typing import Optional

from sqlmodel import Session

from schedule_server.core.exceptions import ConstraintViolation
from schedule_server.core.security import get_password_hash, verify_password
from schedule_server.models import User
from schedule_server.repositories import Page, UserRepository
from schedule_server.schemas import UserCreate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: Session):
        self.repository = UserRepository(session)

    def create(self, payload: UserCreate) -> User:
        email = payload.email.lower()
        if self.repository.username_exists(payload.username):
            raise ConstraintViolation(
                "User", "username", f"Username '{payload.username}' is already taken."
            )
        if self.repository.email_exists(email):
            raise ConstraintViolation("User", "email", "Email is already registered.")

        user = self.repository.add(
            User(
                username=payload.username,
                email=email,
                first_name=payload.first_name,
                last_name=payload.last_name,
                hashed_password=get_password_hash(payload.password),
            )
        )
        logger.info(f"Created user {user.id} ({user.username})")
        return user

    def get(self, user_id: int) -> User:
        return self.repository.get_required(user_id)

    def get_paged(self, page_number: int, page_size: int) -> Page[User]:
        return self.repository.get_paged(page_number, page_size)

    def delete(self, user_id: int) -> None:
        """Remove the user; roles, attendance and settings go with it."""
        self.repository.delete(self.repository.get_required(user_id))
        logger.info(f"Deleted user {user_id}")

    def authenticate(self, login: str, password: str) -> Optional[User]:
        user = self.repository.get_by_login(login)
        if user is None or not verify_password(password, user.hashed_password):
            return None
        return user
