from __future__ import annotations

from fastapi import APIRouter, status

from schedule_server.api.deps import AdminUser, PageDep
from schedule_server.db import SessionDep
from schedule_server.models import User
from schedule_server.schemas import PaginatedResponse, UserCreate, UserRead
from schedule_server.services.users import UserService

router = APIRouter()


@router.post(
    "/",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
def create_user(payload: UserCreate, session: SessionDep, _: AdminUser) -> User:
    return UserService(session).create(payload)


@router.get("/", response_model=PaginatedResponse[UserRead], summary="List users")
def list_users(
    session: SessionDep, paging: PageDep, _: AdminUser
) -> PaginatedResponse[UserRead]:
    page = UserService(session).get_paged(paging.page_number, paging.page_size)
    return PaginatedResponse[UserRead].from_page(page, UserRead.model_validate)


@router.get("/{user_id}", response_model=UserRead, summary="Get a user")
def get_user(user_id: int, session: SessionDep, _: AdminUser) -> User:
    return UserService(session).get(user_id)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a user"
)
def delete_user(user_id: int, session: SessionDep, _: AdminUser) -> None:
    UserService(session).delete(user_id)
