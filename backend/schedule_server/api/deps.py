from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Callable, Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer

from schedule_server.core.config import settings
from schedule_server.core.exceptions import InvalidArgument
from schedule_server.core.security import verify_token
from schedule_server.db import SessionDep
from schedule_server.services.authorization import (
    ACTIVE_USER,
    ADMIN,
    Decision,
    Identity,
    PermissionRequirement,
    decide,
    parse_user_id,
)
from schedule_server.services.permissions import has_permission

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False
)


def get_identity(token: Optional[str] = Depends(oauth2_scheme)) -> Identity:
    """Identity behind the bearer token; anonymous if it is missing or invalid."""
    if not token:
        return Identity.anonymous()
    try:
        payload = verify_token(token, token_type="access")
    except ValueError:
        return Identity.anonymous()
    return Identity(user_id=payload.get("sub"), is_authenticated=True)


def require_permission(permission_name: str) -> Callable[..., int]:
    """
    Dependency factory guarding a route with ``permission_name``.

    Resolves to the caller's numeric user id. A denial is a 401 for anonymous
    callers and a plain 403 otherwise; the response never says which
    permission was missing.
    """
    requirement = PermissionRequirement(permission_name)

    def dependency(
        session: SessionDep, identity: Identity = Depends(get_identity)
    ) -> int:
        if not identity.is_authenticated:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )

        decision = decide(
            identity,
            requirement,
            lambda user_id, name: has_permission(session, user_id, name),
        )
        if decision is not Decision.GRANTED:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden"
            )
        return parse_user_id(identity.user_id)

    return dependency


@dataclass
class PageParams:
    page_number: int
    page_size: int


def get_page_params(
    page_number: int = Query(default=1, description="Page number, starting at 1"),
    page_size: int = Query(default=10, description="Items per page"),
) -> PageParams:
    # Lower bounds are checked by the repository
    if page_size > settings.MAX_PAGE_SIZE:
        raise InvalidArgument(f"page_size cannot exceed {settings.MAX_PAGE_SIZE}.")
    return PageParams(page_number=page_number, page_size=page_size)


PageDep = Annotated[PageParams, Depends(get_page_params)]
AdminUser = Annotated[int, Depends(require_permission(ADMIN))]
ActiveUser = Annotated[int, Depends(require_permission(ACTIVE_USER))]
