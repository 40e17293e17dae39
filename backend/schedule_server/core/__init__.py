from .config import settings
from .exceptions import (
    ApplicationError,
    ConstraintViolation,
    Forbidden,
    InvalidArgument,
    NotFound,
    NotPostponable,
    ValidationFailed,
)
from .security import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_token,
    verify_password,
)

__all__ = [
    "settings",
    "ApplicationError",
    "ConstraintViolation",
    "Forbidden",
    "InvalidArgument",
    "NotFound",
    "NotPostponable",
    "ValidationFailed",
    "create_access_token",
    "create_refresh_token",
    "get_password_hash",
    "verify_token",
    "verify_password",
]
