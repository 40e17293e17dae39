"""
Authorization gate.

``decide`` is a pure function of an identity, a requirement and a resolver, so
it can be exercised without a web request. The HTTP layer wraps it in the
``require_permission`` dependency (``schedule_server.api.deps``).
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ADMIN = "Admin"
ACTIVE_USER = "ActiveUser"
VIEWER = "Viewer"

POLICY_NAMES = (ADMIN, ACTIVE_USER, VIEWER)

Resolver = Callable[[int, str], bool]


class Decision(str, enum.Enum):
    GRANTED = "granted"
    DENIED = "denied"


@dataclass(frozen=True)
class Identity:
    """Who is asking; ``user_id`` is the raw subject claim, if any."""

    user_id: Optional[str] = None
    is_authenticated: bool = False

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()


@dataclass(frozen=True)
class PermissionRequirement:
    permission_name: str


def parse_user_id(claim: Optional[str]) -> Optional[int]:
    """Numeric user id from a subject claim, or None if it is unusable."""
    if claim is None:
        return None
    text = str(claim).strip()
    # int() alone would also take "1_0", "+5" and non-ASCII digits
    if not (text.isascii() and text.isdigit()):
        return None
    user_id = int(text)
    return user_id if user_id >= 1 else None


def decide(
    identity: Identity, requirement: PermissionRequirement, resolver: Resolver
) -> Decision:
    if not identity.is_authenticated:
        return Decision.DENIED

    user_id = parse_user_id(identity.user_id)
    if user_id is None:
        logger.info("Denied request with a missing or malformed user id claim")
        return Decision.DENIED

    try:
        granted = resolver(user_id, requirement.permission_name)
    except Exception:
        logger.exception(
            f"Permission resolver failed for user {user_id}; denying access"
        )
        return Decision.DENIED

    if granted:
        return Decision.GRANTED
    logger.info(f"User {user_id} denied {requirement.permission_name}")
    return Decision.DENIED
