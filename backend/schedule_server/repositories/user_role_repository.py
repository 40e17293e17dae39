from __future__ import annotations

from typing import List, Optional

from sqlmodel import Session

from schedule_server.models import UserRole
from schedule_server.repositories.base import GenericRepository
from schedule_server.repositories.specification import field


class UserRoleRepository(GenericRepository[UserRole]):
    def __init__(self, session: Session):
        super().__init__(UserRole, session)

    def get_user_roles_by_user_id(self, user_id: int) -> List[UserRole]:
        return self.find(field("user_id") == user_id)

    def get_user_roles_by_role_id(self, role_id: int) -> List[UserRole]:
        return self.find(field("role_id") == role_id)

    def get_user_role(self, user_id: int, role_id: int) -> Optional[UserRole]:
        return self.first((field("user_id") == user_id) & (field("role_id") == role_id))

    def user_has_role(self, user_id: int, role_id: int) -> bool:
        return self.any((field("user_id") == user_id) & (field("role_id") == role_id))

    def remove_user_role(self, user_id: int, role_id: int) -> bool:
        user_role = self.get_user_role(user_id, role_id)
        if user_role is None:
            return False
        self.delete(user_role)
        return True
