"""Role and permission administration."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from sqlmodel import Session, select

from schedule_server.core.exceptions import ConstraintViolation, NotFound
from schedule_server.models import Permission, Role, RolePermission, User, UserRole
from schedule_server.repositories import (
    Page,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)

logger = logging.getLogger(__name__)


class RbacService:
    def __init__(self, session: Session):
        self.session = session
        self.roles = RoleRepository(session)
        self.permissions = PermissionRepository(session)
        self.user_roles = UserRoleRepository(session)
        self.role_permissions = RolePermissionRepository(session)
        self.users = UserRepository(session)

    # Roles and permissions

    def create_role(self, name: str, description: str = "") -> Role:
        if self.roles.role_name_exists(name):
            raise ConstraintViolation("Role", "name", f"Role '{name}' already exists.")
        role = self.roles.add(Role(name=name, description=description))
        logger.info(f"Created role {role.name}")
        return role

    def create_permission(self, name: str, description: str = "") -> Permission:
        if self.permissions.permission_name_exists(name):
            raise ConstraintViolation(
                "Permission", "name", f"Permission '{name}' already exists."
            )
        permission = self.permissions.add(Permission(name=name, description=description))
        logger.info(f"Created permission {permission.name}")
        return permission

    def list_permissions(self) -> List[Permission]:
        return self.permissions.get_all()

    def get_roles_paged(self, page_number: int, page_size: int) -> Page[Role]:
        return self.roles.get_paged(page_number, page_size)

    def get_role_permissions(self, role_id: int) -> List[Permission]:
        self.roles.get_required(role_id)
        return self.permissions.get_permissions_by_role(role_id)

    def set_role_permissions(self, role_id: int, permission_ids: Iterable[int]) -> List[Permission]:
        """Replace the role's permissions; every id has to exist."""
        self.roles.get_required(role_id)
        wanted = list(dict.fromkeys(permission_ids))
        missing = [pid for pid in wanted if self.permissions.get_by_id(pid) is None]
        if missing:
            raise NotFound("Permission", missing[0])
        self.role_permissions.replace_role_permissions(role_id, wanted)
        logger.info(f"Role {role_id} now grants permissions {wanted}")
        return self.permissions.get_permissions_by_role(role_id)

    def remove_role_permission(self, role_id: int, permission_id: int) -> None:
        if not self.role_permissions.remove_role_permission(role_id, permission_id):
            raise NotFound(
                "RolePermission",
                permission_id,
                f"Role {role_id} does not grant permission {permission_id}.",
            )

    # Assignments

    def assign_role(self, user_id: int, role_id: int) -> UserRole:
        self.users.get_required(user_id)
        self.roles.get_required(role_id)
        if self.user_roles.user_has_role(user_id, role_id):
            raise ConstraintViolation(
                "UserRole", "role_id", f"User {user_id} already has role {role_id}."
            )
        user_role = self.user_roles.add(UserRole(user_id=user_id, role_id=role_id))
        logger.info(f"Assigned role {role_id} to user {user_id}")
        return user_role

    def revoke_role(self, user_id: int, role_id: int) -> None:
        if not self.user_roles.remove_user_role(user_id, role_id):
            raise NotFound(
                "UserRole", role_id, f"User {user_id} does not have role {role_id}."
            )
        logger.info(f"Revoked role {role_id} from user {user_id}")

    def role_names_by_user(self, user_ids: Iterable[int]) -> Dict[int, List[str]]:
        ids = list(user_ids)
        names: Dict[int, List[str]] = {user_id: [] for user_id in ids}
        if not ids:
            return names
        statement = (
            select(UserRole.user_id, Role.name)
            .join(Role, Role.id == UserRole.role_id)
            .where(UserRole.user_id.in_(ids))
            .order_by(Role.name)
        )
        for user_id, role_name in self.session.exec(statement).all():
            names[user_id].append(role_name)
        return names

    def permissions_by_role(self, role_ids: Iterable[int]) -> Dict[int, List[Permission]]:
        ids = list(role_ids)
        grants: Dict[int, List[Permission]] = {role_id: [] for role_id in ids}
        if not ids:
            return grants
        statement = (
            select(RolePermission.role_id, Permission)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(RolePermission.role_id.in_(ids))
            .order_by(Permission.name)
        )
        for role_id, permission in self.session.exec(statement).all():
            grants[role_id].append(permission)
        return grants

    def get_users_paged(self, page_number: int, page_size: int) -> Page[User]:
        return self.users.get_paged(page_number, page_size)
