from .event import (
    BulkFailureRead,
    BulkResultRead,
    EventCreate,
    EventCreateWithUser,
    EventIdsRequest,
    EventRead,
    EventSettingsCreate,
    EventSettingsRead,
    EventSettingsUpdate,
    EventTypeCreate,
    EventTypeRead,
    EventTypeUpdate,
    EventUpdate,
    UserEventCreate,
    UserEventRead,
)
from .pagination import PaginatedResponse
from .rbac import (
    PermissionCreate,
    PermissionRead,
    RoleCreate,
    RolePermissionsUpdate,
    RoleRead,
    RoleWithPermissions,
    UserRoleAssign,
)
from .user import (
    RefreshTokenRequest,
    TokenPair,
    UserCreate,
    UserLogin,
    UserRead,
    UserWithRoles,
)

__all__ = [
    "BulkFailureRead",
    "BulkResultRead",
    "EventCreate",
    "EventCreateWithUser",
    "EventIdsRequest",
    "EventRead",
    "EventSettingsCreate",
    "EventSettingsRead",
    "EventSettingsUpdate",
    "EventTypeCreate",
    "EventTypeRead",
    "EventTypeUpdate",
    "EventUpdate",
    "PaginatedResponse",
    "PermissionCreate",
    "PermissionRead",
    "RefreshTokenRequest",
    "RoleCreate",
    "RolePermissionsUpdate",
    "RoleRead",
    "RoleWithPermissions",
    "TokenPair",
    "UserCreate",
    "UserEventCreate",
    "UserEventRead",
    "UserLogin",
    "UserRead",
    "UserRoleAssign",
    "UserWithRoles",
]
