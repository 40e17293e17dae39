from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from schedule_server.api.deps import AdminUser, PageDep
from schedule_server.db import SessionDep
from schedule_server.models import Permission, Role
from schedule_server.schemas import (
    PaginatedResponse,
    PermissionCreate,
    PermissionRead,
    RoleCreate,
    RolePermissionsUpdate,
    RoleRead,
    RoleWithPermissions,
    UserRead,
    UserRoleAssign,
    UserWithRoles,
)
from schedule_server.services.rbac import RbacService

router = APIRouter()


@router.get(
    "/roles",
    response_model=PaginatedResponse[RoleWithPermissions],
    summary="List roles with their permissions",
)
def list_roles(
    session: SessionDep, paging: PageDep, _: AdminUser
) -> PaginatedResponse[RoleWithPermissions]:
    service = RbacService(session)
    page = service.get_roles_paged(paging.page_number, paging.page_size)
    grants = service.permissions_by_role(role.id for role in page.items)

    def to_read(role: Role) -> RoleWithPermissions:
        return RoleWithPermissions(
            **RoleRead.model_validate(role).model_dump(),
            permissions=[PermissionRead.model_validate(p) for p in grants[role.id]],
        )

    return PaginatedResponse[RoleWithPermissions].from_page(page, to_read)


@router.post(
    "/roles",
    response_model=RoleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a role",
)
def create_role(payload: RoleCreate, session: SessionDep, _: AdminUser) -> Role:
    return RbacService(session).create_role(payload.name, payload.description)


@router.get(
    "/permissions", response_model=List[PermissionRead], summary="List permissions"
)
def list_permissions(session: SessionDep, _: AdminUser) -> List[Permission]:
    return RbacService(session).list_permissions()


@router.post(
    "/permissions",
    response_model=PermissionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a permission",
)
def create_permission(
    payload: PermissionCreate, session: SessionDep, _: AdminUser
) -> Permission:
    return RbacService(session).create_permission(payload.name, payload.description)


@router.get(
    "/roles/{role_id}/permissions",
    response_model=List[PermissionRead],
    summary="Permissions granted by a role",
)
def get_role_permissions(
    role_id: int, session: SessionDep, _: AdminUser
) -> List[Permission]:
    return RbacService(session).get_role_permissions(role_id)


@router.put(
    "/roles/{role_id}/permissions",
    response_model=List[PermissionRead],
    summary="Replace a role's permissions",
)
def set_role_permissions(
    role_id: int, payload: RolePermissionsUpdate, session: SessionDep, _: AdminUser
) -> List[Permission]:
    return RbacService(session).set_role_permissions(role_id, payload.permission_ids)


@router.delete(
    "/roles/{role_id}/permissions/{permission_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove one permission from a role",
)
def remove_role_permission(
    role_id: int, permission_id: int, session: SessionDep, _: AdminUser
) -> None:
    RbacService(session).remove_role_permission(role_id, permission_id)


@router.get(
    "/users",
    response_model=PaginatedResponse[UserWithRoles],
    summary="List users with their roles",
)
def list_users_with_roles(
    session: SessionDep, paging: PageDep, _: AdminUser
) -> PaginatedResponse[UserWithRoles]:
    service = RbacService(session)
    page = service.get_users_paged(paging.page_number, paging.page_size)
    roles = service.role_names_by_user(user.id for user in page.items)
    return PaginatedResponse[UserWithRoles].from_page(
        page,
        lambda user: UserWithRoles(
            **UserRead.model_validate(user).model_dump(), roles=roles[user.id]
        ),
    )


@router.post(
    "/users/{user_id}/roles",
    status_code=status.HTTP_201_CREATED,
    summary="Assign a role to a user",
)
def assign_role(
    user_id: int, payload: UserRoleAssign, session: SessionDep, _: AdminUser
) -> dict[str, int]:
    user_role = RbacService(session).assign_role(user_id, payload.role_id)
    return {"user_id": user_role.user_id, "role_id": user_role.role_id}


@router.delete(
    "/users/{user_id}/roles/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke a role from a user",
)
def revoke_role(user_id: int, role_id: int, session: SessionDep, _: AdminUser) -> None:
    RbacService(session).revoke_role(user_id, role_id)
