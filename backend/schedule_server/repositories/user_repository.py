from __future__ import annotations

from typing import Optional

from sqlmodel import Session

from schedule_server.models import User
from schedule_server.repositories.base import GenericRepository
from schedule_server.repositories.specification import field


class UserRepository(GenericRepository[User]):
    def __init__(self, session: Session):
        super().__init__(User, session)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.first(field("username") == username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.first(field("email") == email.lower())

    def get_by_login(self, login: str) -> Optional[User]:
        """Look a user up by username or e-mail."""
        return self.first(
            (field("username") == login) | (field("email") == login.lower())
        )

    def username_exists(self, username: str) -> bool:
        return self.any(field("username") == username)

    def email_exists(self, email: str) -> bool:
        return self.any(field("email") == email.lower())
