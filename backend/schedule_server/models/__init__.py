from .base import BaseFields, utcnow
from .types import UTCDateTime, as_utc
from .event import Event
from .event_settings import EventSettings
from .event_type import EventType
from .permission import Permission
from .role import Role
from .role_permission import RolePermission
from .user import User
from .user_event import UserEvent
from .user_role import UserRole

__all__ = [
    "BaseFields",
    "Event",
    "EventSettings",
    "EventType",
    "Permission",
    "Role",
    "RolePermission",
    "User",
    "UserEvent",
    "UserRole",
    "UTCDateTime",
    "as_utc",
    "utcnow",
]
