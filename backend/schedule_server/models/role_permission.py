from __future__ import annotations

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from .base import BaseFields


class RolePermission(BaseFields, table=True):
    """Permission granted to a role."""

    __tablename__ = "role_permissions"
    __table_args__ = (
        UniqueConstraint(
            "role_id", "permission_id", name="uq_role_permissions_role_id_permission_id"
        ),
    )

    role_id: int = Field(
        foreign_key="roles.id", nullable=False, index=True, ondelete="CASCADE"
    )
    permission_id: int = Field(
        foreign_key="permissions.id", nullable=False, index=True, ondelete="CASCADE"
    )
