"""Shared pytest fixtures for backend tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone

# Keep the module-level engine off the developer database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from schedule_server.core.limiter import limiter
from schedule_server.core.security import create_access_token, get_password_hash
from schedule_server.db import enable_sqlite_foreign_keys, get_session, init_db
from schedule_server.main import app
from schedule_server.models import (
    Event,
    Permission,
    Role,
    RolePermission,
    User,
    UserEvent,
    UserRole,
)
from schedule_server.repositories import (
    EventRepository,
    PermissionRepository,
    RoleRepository,
    UserEventRepository,
    UserRepository,
)

DEFAULT_PASSWORD = "Password123!"
# Hash once; bcrypt is deliberately slow
DEFAULT_PASSWORD_HASH = get_password_hash(DEFAULT_PASSWORD)

EVENT_START = datetime(2030, 1, 7, 9, 0, tzinfo=timezone.utc)


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """Fresh in-memory database per test, shared across connections."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine: Engine) -> Iterator[TestClient]:
    """TestClient whose requests use the test database."""

    def _get_session() -> Iterator[Session]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(session: Session) -> Callable[..., User]:
    repository = UserRepository(session)

    def _make_user(username: str = "alice", email: str | None = None) -> User:
        return repository.add(
            User(
                username=username,
                email=email or f"{username}@example.com",
                hashed_password=DEFAULT_PASSWORD_HASH,
            )
        )

    return _make_user


@pytest.fixture()
def grant(session: Session) -> Callable[..., Role]:
    """Give ``user`` a fresh role holding the named permissions."""

    roles = RoleRepository(session)
    permissions = PermissionRepository(session)

    def _grant(user: User, *permission_names: str) -> Role:
        role = roles.add(Role(name=f"role-{user.id}-{roles.count()}"))
        for name in permission_names:
            permission = permissions.get_by_name(name) or permissions.add(
                Permission(name=name)
            )
            session.add(RolePermission(role_id=role.id, permission_id=permission.id))
        session.add(UserRole(user_id=user.id, role_id=role.id))
        session.commit()
        return role

    return _grant


@pytest.fixture()
def make_event(session: Session) -> Callable[..., Event]:
    repository = EventRepository(session)
    links = UserEventRepository(session)

    def _make_event(creator: User | None = None, *, attend: bool = True, **overrides) -> Event:
        values = {
            "title": "Planning",
            "start_date_time": EVENT_START,
            "end_date_time": EVENT_START + timedelta(hours=1),
            "created_by_id": creator.id if creator else None,
        }
        values.update(overrides)
        event = repository.add(Event(**values))
        if creator is not None and attend:
            links.add(UserEvent(user_id=creator.id, event_id=event.id))
        return event

    return _make_event


@pytest.fixture()
def auth_headers() -> Callable[[int], dict[str, str]]:
    def _auth_headers(user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _auth_headers
