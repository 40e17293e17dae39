"""
Default roles, permissions and demo accounts.

Safe to run repeatedly: rows that already exist are left alone, and only
missing grants and assignments are added.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List

from sqlmodel import Session

from schedule_server.core.security import get_password_hash
from schedule_server.models import Permission, Role, User, UserRole
from schedule_server.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)
from schedule_server.services.authorization import ACTIVE_USER, ADMIN, VIEWER

logger = logging.getLogger(__name__)

DEFAULT_ROLES: Dict[str, str] = {
    "SuperAdmin": "Super Administrator with full system access",
    "Admin": "Administrator with administrative privileges",
    "Moderator": "Moderator with content management privileges",
    "User": "Regular user with basic privileges",
    "Guest": "Guest user with limited access",
}

DEFAULT_PERMISSIONS: Dict[str, str] = {
    ADMIN: "Access to user and role administration",
    ACTIVE_USER: "Can manage own events and settings",
    VIEWER: "Read-only access",
    "CanViewUsers": "Can view user list and details",
    "CanCreateUsers": "Can create new users",
    "CanDeleteUsers": "Can delete users",
    "CanAssignRoles": "Can assign roles to users",
    "CanViewRoles": "Can view role list and details",
    "CanViewPermissions": "Can view permission list and details",
    "CanViewOwnProfile": "Can view own profile",
    "CanEditOwnProfile": "Can edit own profile",
}

ROLE_GRANTS: Dict[str, Callable[[str], bool]] = {
    "SuperAdmin": lambda name: True,
    "Admin": lambda name: name != "CanDeleteUsers",
    "Moderator": lambda name: name in (ACTIVE_USER, VIEWER)
    or name.startswith("CanView")
    or name.endswith("OwnProfile"),
    "User": lambda name: name in (ACTIVE_USER, VIEWER) or name.endswith("OwnProfile"),
    "Guest": lambda name: name in (VIEWER, "CanViewOwnProfile"),
}

DEMO_USERS: List[dict] = [
    {
        "username": "superadmin",
        "email": "superadmin@example.com",
        "first_name": "Super",
        "last_name": "Admin",
        "password": "SuperAdmin123!",
        "role": "SuperAdmin",
    },
    {
        "username": "admin",
        "email": "admin@example.com",
        "first_name": "Admin",
        "last_name": "User",
        "password": "Admin123!",
        "role": "Admin",
    },
    {
        "username": "moderator",
        "email": "moderator@example.com",
        "first_name": "Moderator",
        "last_name": "User",
        "password": "Moderator123!",
        "role": "Moderator",
    },
    {
        "username": "testuser",
        "email": "user@example.com",
        "first_name": "Test",
        "last_name": "User",
        "password": "User123!",
        "role": "User",
    },
]


def seed_roles(session: Session) -> Dict[str, Role]:
    repository = RoleRepository(session)
    roles: Dict[str, Role] = {}
    for name, description in DEFAULT_ROLES.items():
        role = repository.get_by_name(name)
        if role is None:
            role = repository.add(Role(name=name, description=description))
            logger.info(f"Seeded role {name}")
        roles[name] = role
    return roles


def seed_permissions(session: Session) -> Dict[str, Permission]:
    repository = PermissionRepository(session)
    permissions: Dict[str, Permission] = {}
    for name, description in DEFAULT_PERMISSIONS.items():
        permission = repository.get_by_name(name)
        if permission is None:
            permission = repository.add(Permission(name=name, description=description))
            logger.info(f"Seeded permission {name}")
        permissions[name] = permission
    return permissions


def seed_role_permissions(
    session: Session, roles: Dict[str, Role], permissions: Dict[str, Permission]
) -> None:
    repository = RolePermissionRepository(session)
    for role_name, grants in ROLE_GRANTS.items():
        role = roles[role_name]
        current = {
            grant.permission_id
            for grant in repository.get_role_permissions_by_role_id(role.id)
        }
        wanted = [p.id for name, p in permissions.items() if grants(name)]
        repository.replace_role_permissions(role.id, sorted(current.union(wanted)))


def seed_users(session: Session, roles: Dict[str, Role]) -> List[User]:
    users = UserRepository(session)
    user_roles = UserRoleRepository(session)
    seeded: List[User] = []
    for data in DEMO_USERS:
        user = users.get_by_username(data["username"])
        if user is None:
            user = users.add(
                User(
                    username=data["username"],
                    email=data["email"],
                    first_name=data["first_name"],
                    last_name=data["last_name"],
                    hashed_password=get_password_hash(data["password"]),
                )
            )
            logger.info(f"Seeded user {user.username}")
        role = roles[data["role"]]
        if not user_roles.user_has_role(user.id, role.id):
            user_roles.add(UserRole(user_id=user.id, role_id=role.id))
        seeded.append(user)
    return seeded


def seed_database(session: Session, *, with_demo_users: bool = True) -> None:
    roles = seed_roles(session)
    permissions = seed_permissions(session)
    seed_role_permissions(session, roles, permissions)
    if with_demo_users:
        seed_users(session, roles)
    logger.info("Database seed complete")
