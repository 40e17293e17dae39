from __future__ import annotations

from schedule_server.models import (
    Event,
    EventSettings,
    EventType,
    Role,
    User,
    UserEvent,
    UserRole,
)
from schedule_server.repositories import (
    EventRepository,
    EventSettingsRepository,
    EventTypeRepository,
    RoleRepository,
    UserEventRepository,
    UserRepository,
    UserRoleRepository,
    default_policy,
)


def test_deleting_event_type_nulls_reference(session, make_user, make_event) -> None:
    event_type = EventTypeRepository(session).add(EventType(name="Workshop"))
    event = make_event(make_user(), event_type_id=event_type.id)

    EventTypeRepository(session).delete(event_type)
    session.expire_all()

    reloaded = EventRepository(session).get_by_id(event.id)
    assert reloaded is not None
    assert reloaded.event_type_id is None


def test_deleting_user_cascades_links_and_keeps_events(
    session, make_user, make_event
) -> None:
    owner = make_user("owner")
    guest = make_user("guest")
    event = make_event(owner)
    links = UserEventRepository(session)
    links.add(UserEvent(user_id=guest.id, event_id=event.id))
    role = RoleRepository(session).add(Role(name="Member"))
    UserRoleRepository(session).add(UserRole(user_id=owner.id, role_id=role.id))
    EventSettingsRepository(session).add(
        EventSettings(user_id=owner.id, follow_up_period_days=3)
    )
    owner_id = owner.id

    UserRepository(session).delete(owner)
    session.expire_all()

    kept = EventRepository(session).get_by_id(event.id)
    assert kept is not None
    assert kept.created_by_id is None
    remaining = links.get_user_events_by_event_id(event.id)
    assert [link.user_id for link in remaining] == [guest.id]
    assert UserRoleRepository(session).count() == 0
    assert not EventSettingsRepository(session).user_has_settings(owner_id)


def test_deleting_event_removes_attendance(session, make_user, make_event) -> None:
    event = make_event(make_user())

    EventRepository(session).delete(event)

    assert UserEventRepository(session).count() == 0


def test_rules_cover_both_directions() -> None:
    parents = {rule.parent for rule in default_policy.rules_for_child(Event)}
    children = {rule.child.__name__ for rule in default_policy.rules_for_parent(User)}

    assert parents == {EventType, User}
    assert children == {"UserRole", "Event", "UserEvent", "EventSettings"}
