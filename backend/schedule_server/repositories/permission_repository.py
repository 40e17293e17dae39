from __future__ import annotations

from typing import List, Optional

from sqlmodel import Session, select

from schedule_server.models import Permission, RolePermission
from schedule_server.repositories.base import GenericRepository
from schedule_server.repositories.specification import field


class PermissionRepository(GenericRepository[Permission]):
    def __init__(self, session: Session):
        super().__init__(Permission, session)

    def get_by_name(self, name: str) -> Optional[Permission]:
        return self.first(field("name") == name)

    def permission_name_exists(self, name: str) -> bool:
        return self.any(field("name") == name)

    def get_permissions_by_role(self, role_id: int) -> List[Permission]:
        granted = select(RolePermission.permission_id).where(
            RolePermission.role_id == role_id
        )
        statement = (
            select(Permission)
            .where(Permission.id.in_(granted))
            .order_by(Permission.name)
        )
        return list(self.session.exec(statement).all())
