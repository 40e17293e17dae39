from .base import GenericRepository, Page, commit_or_raise
from .event_repository import EventRepository
from .event_settings_repository import EventSettingsRepository
from .event_type_repository import EventTypeRepository
from .permission_repository import PermissionRepository
from .referential import ForeignKeyRule, OnDelete, ReferentialPolicy, default_policy
from .role_permission_repository import RolePermissionRepository
from .role_repository import RoleRepository
from .specification import Predicate, all_of, any_of, field
from .user_event_repository import UserEventRepository
from .user_repository import UserRepository
from .user_role_repository import UserRoleRepository

__all__ = [
    "EventRepository",
    "EventSettingsRepository",
    "EventTypeRepository",
    "ForeignKeyRule",
    "GenericRepository",
    "OnDelete",
    "Page",
    "PermissionRepository",
    "Predicate",
    "ReferentialPolicy",
    "RolePermissionRepository",
    "RoleRepository",
    "UserEventRepository",
    "UserRepository",
    "UserRoleRepository",
    "all_of",
    "any_of",
    "commit_or_raise",
    "default_policy",
    "field",
]
