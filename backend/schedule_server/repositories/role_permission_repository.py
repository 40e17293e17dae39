from __future__ import annotations

from typing import Iterable, List, Optional

from sqlmodel import Session

from schedule_server.models import RolePermission
from schedule_server.repositories.base import GenericRepository, commit_or_raise
from schedule_server.repositories.specification import field


class RolePermissionRepository(GenericRepository[RolePermission]):
    def __init__(self, session: Session):
        super().__init__(RolePermission, session)

    def get_role_permissions_by_role_id(self, role_id: int) -> List[RolePermission]:
        return self.find(field("role_id") == role_id)

    def get_role_permissions_by_permission_id(
        self, permission_id: int
    ) -> List[RolePermission]:
        return self.find(field("permission_id") == permission_id)

    def get_role_permission(
        self, role_id: int, permission_id: int
    ) -> Optional[RolePermission]:
        return self.first(
            (field("role_id") == role_id) & (field("permission_id") == permission_id)
        )

    def role_has_permission(self, role_id: int, permission_id: int) -> bool:
        return self.any(
            (field("role_id") == role_id) & (field("permission_id") == permission_id)
        )

    def remove_role_permission(self, role_id: int, permission_id: int) -> bool:
        role_permission = self.get_role_permission(role_id, permission_id)
        if role_permission is None:
            return False
        self.delete(role_permission)
        return True

    def replace_role_permissions(
        self, role_id: int, permission_ids: Iterable[int]
    ) -> List[RolePermission]:
        """Swap a role's grants for ``permission_ids`` in one transaction."""
        existing = self.get_role_permissions_by_role_id(role_id)
        self.delete_range(existing, commit=False)
        # dict.fromkeys keeps the caller's order while dropping repeats
        grants = [
            RolePermission(role_id=role_id, permission_id=permission_id)
            for permission_id in dict.fromkeys(permission_ids)
        ]
        created = self.add_range(grants, commit=False)
        commit_or_raise(self.session, self.resource)
        return created
