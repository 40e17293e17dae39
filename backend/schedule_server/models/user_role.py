from __future__ import annotations

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from .base import BaseFields


class UserRole(BaseFields, table=True):
    """Role membership of a user."""

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_id_role_id"),
    )

    user_id: int = Field(
        foreign_key="users.id", nullable=False, index=True, ondelete="CASCADE"
    )
    role_id: int = Field(
        foreign_key="roles.id", nullable=False, index=True, ondelete="CASCADE"
    )
