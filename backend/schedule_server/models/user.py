from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from .base import BaseFields


class User(BaseFields, table=True):
    """Account an actor authenticates as."""

    __tablename__ = "users"

    username: str = Field(index=True, unique=True, max_length=100)
    email: str = Field(index=True, unique=True, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    hashed_password: str = Field(max_length=255)
