from __future__ import annotations

from sqlmodel import Field

from .base import BaseFields


class Permission(BaseFields, table=True):
    """Named capability, e.g. ``Admin`` or ``ActiveUser``."""

    __tablename__ = "permissions"

    name: str = Field(index=True, unique=True, max_length=100)
    description: str = Field(default="", max_length=255)
