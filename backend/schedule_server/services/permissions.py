from __future__ import annotations

import logging

from sqlmodel import Session, select

from schedule_server.models import Permission, RolePermission, UserRole

logger = logging.getLogger(__name__)


def permission_condition(user_id: int, permission_name: str):
    """EXISTS clause: some role held by the user grants the named permission."""
    return (
        select(UserRole.id)
        .join(RolePermission, RolePermission.role_id == UserRole.role_id)
        .join(Permission, Permission.id == RolePermission.permission_id)
        .where(UserRole.user_id == user_id, Permission.name == permission_name)
        .exists()
    )


def has_permission(session: Session, user_id: int, permission_name: str) -> bool:
    """
    Whether any of the user's roles grants ``permission_name``.

    Unknown users, unknown permissions and users without roles all resolve to
    ``False``; they are not errors.
    """
    if user_id < 1 or not permission_name:
        return False
    granted = bool(
        session.exec(select(permission_condition(user_id, permission_name))).one()
    )
    logger.debug(f"Permission {permission_name} for user {user_id}: {granted}")
    return granted


def get_user_permission_names(session: Session, user_id: int) -> list[str]:
    statement = (
        select(Permission.name)
        .join(RolePermission, RolePermission.permission_id == Permission.id)
        .join(UserRole, UserRole.role_id == RolePermission.role_id)
        .where(UserRole.user_id == user_id)
        .distinct()
        .order_by(Permission.name)
    )
    return list(session.exec(statement).all())
