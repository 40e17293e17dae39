from __future__ import annotations

from typing import Optional

from sqlmodel import Session

from schedule_server.models import Role
from schedule_server.repositories.base import GenericRepository
from schedule_server.repositories.specification import field


class RoleRepository(GenericRepository[Role]):
    def __init__(self, session: Session):
        super().__init__(Role, session)

    def get_by_name(self, name: str) -> Optional[Role]:
        return self.first(field("name") == name)

    def role_name_exists(self, name: str) -> bool:
        return self.any(field("name") == name)
