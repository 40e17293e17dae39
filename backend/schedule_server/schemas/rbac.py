from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RoleCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)


class RoleRead(RoleCreate):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PermissionCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)


class PermissionRead(PermissionCreate):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoleWithPermissions(RoleRead):
    permissions: List[PermissionRead] = []


class RolePermissionsUpdate(BaseModel):
    permission_ids: List[int]


class UserRoleAssign(BaseModel):
    role_id: int
