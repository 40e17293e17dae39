from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from schedule_server.core.exceptions import (
    ConstraintViolation,
    InvalidArgument,
    NotFound,
)
from schedule_server.models import (
    Event,
    EventType,
    Permission,
    Role,
    RolePermission,
    UserRole,
)
from schedule_server.repositories import (
    EventRepository,
    EventTypeRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserRoleRepository,
    field,
)

from conftest import EVENT_START


def _add_event_types(session, count: int) -> list[EventType]:
    return EventTypeRepository(session).add_range(
        [EventType(name=f"type-{index:02d}") for index in range(count)]
    )


def test_add_assigns_id_and_timestamps(session) -> None:
    event_type = EventTypeRepository(session).add(EventType(name="Meeting"))

    assert event_type.id is not None and event_type.id >= 1
    assert event_type.created_at is not None
    assert event_type.updated_at == event_type.created_at


def test_round_trip_preserves_fields(session) -> None:
    repository = EventRepository(session)
    added = repository.add(
        Event(
            title="Review",
            description="Quarterly",
            can_be_postponed=False,
            start_date_time=EVENT_START,
            end_date_time=EVENT_START + timedelta(hours=2),
        )
    )
    session.expire_all()

    loaded = repository.get_by_id(added.id)

    assert loaded is not None
    assert loaded.title == "Review"
    assert loaded.description == "Quarterly"
    assert loaded.can_be_postponed is False
    assert loaded.end_date_time - loaded.start_date_time == timedelta(hours=2)


def test_datetimes_load_as_utc(session) -> None:
    repository = EventRepository(session)
    offset = timezone(timedelta(hours=2))
    added = repository.add(
        Event(
            title="Offset",
            start_date_time=datetime(2030, 1, 7, 11, 0, tzinfo=offset),
            end_date_time=datetime(2030, 1, 7, 10, 0),
        )
    )
    session.expire_all()

    loaded = repository.get_by_id(added.id)

    assert loaded.start_date_time == EVENT_START
    assert loaded.start_date_time.tzinfo == timezone.utc
    assert loaded.end_date_time == EVENT_START + timedelta(hours=1)
    assert loaded.created_at.tzinfo == timezone.utc
    assert repository.get_upcoming_events(now=datetime(2030, 1, 7, 8, 59)) == [loaded]


def test_get_paged_returns_partial_last_page(session) -> None:
    _add_event_types(session, 25)
    repository = EventTypeRepository(session)

    page = repository.get_paged(3, 10)

    assert len(page.items) == 5
    assert page.total_count == 25
    assert page.total_pages == 3
    assert page.has_previous and not page.has_next


def test_get_paged_beyond_last_page_is_empty(session) -> None:
    _add_event_types(session, 25)

    page = EventTypeRepository(session).get_paged(10, 10)

    assert page.items == []
    assert page.total_count == 25


@pytest.mark.parametrize("page_number, page_size", [(1, 0), (1, -5), (0, 10)])
def test_get_paged_rejects_bad_arguments(session, page_number, page_size) -> None:
    with pytest.raises(InvalidArgument):
        EventTypeRepository(session).get_paged(page_number, page_size)


def test_find_paged_filters_before_paging(session) -> None:
    _add_event_types(session, 25)

    page = EventTypeRepository(session).find_paged(
        field("name").contains("type-1"), 1, 4
    )

    assert page.total_count == 10
    assert [item.name for item in page.items] == [
        "type-10",
        "type-11",
        "type-12",
        "type-13",
    ]


def test_add_range_is_all_or_nothing(session) -> None:
    repository = EventRepository(session)
    batch = [
        Event(
            title=f"Event {index}",
            start_date_time=EVENT_START,
            end_date_time=EVENT_START + timedelta(hours=1),
        )
        for index in range(5)
    ]
    batch[3].end_date_time = EVENT_START - timedelta(hours=1)

    with pytest.raises(ConstraintViolation) as excinfo:
        repository.add_range(batch)

    assert excinfo.value.field == "end_date_time"
    assert repository.count() == 0


def test_add_range_with_duplicate_names_persists_nothing(session) -> None:
    repository = EventTypeRepository(session)

    with pytest.raises(ConstraintViolation) as excinfo:
        repository.add_range([EventType(name="A"), EventType(name="B"), EventType(name="A")])

    assert excinfo.value.field == "name"
    assert repository.count() == 0


def test_duplicate_user_role_is_a_constraint_violation(session, make_user) -> None:
    user = make_user()
    role = RoleRepository(session).add(Role(name="Member"))
    repository = UserRoleRepository(session)
    repository.add(UserRole(user_id=user.id, role_id=role.id))

    with pytest.raises(ConstraintViolation):
        repository.add(UserRole(user_id=user.id, role_id=role.id))

    assert repository.count() == 1


def test_missing_parent_names_the_foreign_key(session) -> None:
    with pytest.raises(ConstraintViolation) as excinfo:
        EventRepository(session).add(Event(title="Orphan", event_type_id=999))

    assert excinfo.value.field == "event_type_id"


def test_event_duration_limit(session) -> None:
    with pytest.raises(ConstraintViolation) as excinfo:
        EventRepository(session).add(
            Event(
                title="Marathon",
                start_date_time=EVENT_START,
                end_date_time=EVENT_START + timedelta(hours=9),
            )
        )

    assert excinfo.value.field == "end_date_time"


def test_update_replaces_fields_and_touches(session) -> None:
    repository = EventTypeRepository(session)
    event_type = repository.add(EventType(name="Old"))
    created_at = event_type.created_at

    updated = repository.update(EventType(id=event_type.id, name="New"))

    assert updated.name == "New"
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


def test_update_of_unknown_id_raises_not_found(session) -> None:
    with pytest.raises(NotFound):
        EventTypeRepository(session).update(EventType(id=42, name="Ghost"))


def test_delete_absent_raises_but_delete_range_skips(session) -> None:
    repository = EventTypeRepository(session)
    kept = repository.add(EventType(name="Kept"))
    gone = repository.add(EventType(name="Gone"))

    with pytest.raises(NotFound):
        repository.delete(EventType(id=999, name="Nope"))

    repository.delete_range([gone, EventType(id=999, name="Nope")])

    assert [item.id for item in repository.get_all()] == [kept.id]


def test_any_and_count(session) -> None:
    _add_event_types(session, 3)
    repository = EventTypeRepository(session)

    assert repository.count() == 3
    assert repository.count(field("name") == "type-01") == 1
    assert repository.any(field("name") == "type-02")
    assert not repository.any(field("name") == "missing")


def test_find_requires_a_predicate(session) -> None:
    with pytest.raises(InvalidArgument):
        EventTypeRepository(session).find(None)


def test_replace_role_permissions_swaps_grants(session) -> None:
    role = RoleRepository(session).add(Role(name="Editor"))
    permissions = PermissionRepository(session).add_range(
        [Permission(name=name) for name in ("read", "write", "delete")]
    )
    repository = RolePermissionRepository(session)
    repository.add(RolePermission(role_id=role.id, permission_id=permissions[0].id))

    repository.replace_role_permissions(
        role.id, [permissions[1].id, permissions[2].id, permissions[1].id]
    )

    names = [p.name for p in PermissionRepository(session).get_permissions_by_role(role.id)]
    assert names == ["delete", "write"]


def test_replace_role_permissions_rolls_back_on_bad_id(session) -> None:
    role = RoleRepository(session).add(Role(name="Editor"))
    permission = PermissionRepository(session).add(Permission(name="read"))
    repository = RolePermissionRepository(session)
    repository.add(RolePermission(role_id=role.id, permission_id=permission.id))

    with pytest.raises(ConstraintViolation):
        repository.replace_role_permissions(role.id, [999])

    assert repository.role_has_permission(role.id, permission.id)
