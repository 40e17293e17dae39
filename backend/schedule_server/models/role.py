from __future__ import annotations

from sqlmodel import Field

from .base import BaseFields


class Role(BaseFields, table=True):
    """Named bundle of permissions."""

    __tablename__ = "roles"

    name: str = Field(index=True, unique=True, max_length=100)
    description: str = Field(default="", max_length=255)
