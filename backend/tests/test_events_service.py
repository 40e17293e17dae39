from __future__ import annotations

from datetime import timedelta

import pytest

from schedule_server.core.exceptions import (
    ConstraintViolation,
    Forbidden,
    InvalidArgument,
    NotFound,
    NotPostponable,
    ValidationFailed,
)
from schedule_server.models import EventSettings
from schedule_server.repositories import EventSettingsRepository, UserEventRepository
from schedule_server.schemas import (
    EventCreate,
    EventCreateWithUser,
    EventTypeCreate,
    EventUpdate,
)
from schedule_server.services.events import BulkFailure, EventLifecycleService

from conftest import EVENT_START


@pytest.fixture()
def service(session) -> EventLifecycleService:
    return EventLifecycleService(session)


def test_postpone_shifts_both_dates_by_one_day(service, make_user, make_event) -> None:
    owner = make_user()
    event = make_event(owner)

    postponed = service.postpone(event.id, owner.id)

    assert postponed.start_date_time == EVENT_START + timedelta(days=1)
    assert postponed.end_date_time == EVENT_START + timedelta(days=1, hours=1)


def test_postpone_preconditions(service, make_user, make_event) -> None:
    owner = make_user("owner")
    other = make_user("other")
    fixed = make_event(owner, can_be_postponed=False)
    untimed = make_event(owner, start_date_time=None, end_date_time=None)

    with pytest.raises(NotFound):
        service.postpone(999, owner.id)
    with pytest.raises(Forbidden):
        service.postpone(fixed.id, other.id)
    with pytest.raises(NotPostponable):
        service.postpone(fixed.id, owner.id)
    with pytest.raises(InvalidArgument):
        service.postpone(untimed.id, owner.id)


def test_bulk_postpone_reports_each_item_in_order(
    service, make_user, make_event
) -> None:
    owner = make_user()
    first = make_event(owner)
    fixed = make_event(owner, can_be_postponed=False)
    third = make_event(owner)

    result = service.bulk_postpone([first.id, fixed.id, third.id], owner.id)

    assert result.succeeded == [first.id, third.id]
    assert [(f.event_id, f.reason) for f in result.failed] == [
        (fixed.id, "NotPostponable")
    ]
    reloaded = service.events.get_by_id(fixed.id)
    assert reloaded.start_date_time == EVENT_START
    assert service.events.get_by_id(third.id).start_date_time == EVENT_START + timedelta(
        days=1
    )


def test_bulk_mixed_failures_do_not_abort(service, make_user, make_event) -> None:
    owner = make_user("owner")
    other = make_user("other")
    mine = make_event(owner)
    theirs = make_event(other)

    result = service.bulk_postpone([404, theirs.id, mine.id], owner.id)

    assert result.succeeded == [mine.id]
    assert result.failed == [
        BulkFailure(404, "NotFound", "Event with ID 404 not found."),
        BulkFailure(theirs.id, "Forbidden", result.failed[1].message),
    ]


def test_reject_removes_only_the_link(service, make_user, make_event) -> None:
    owner = make_user()
    event = make_event(owner)

    service.reject(event.id, owner.id)

    assert service.events.get_by_id(event.id) is not None
    assert not UserEventRepository(service.session).user_has_event(owner.id, event.id)
    with pytest.raises(NotFound):
        service.reject(event.id, owner.id)


def test_bulk_reject(service, make_user, make_event) -> None:
    owner = make_user()
    linked = make_event(owner)
    unlinked = make_event(owner, attend=False)

    result = service.bulk_reject([linked.id, unlinked.id, 77], owner.id)

    assert result.succeeded == [linked.id]
    assert [f.reason for f in result.failed] == ["NotFound", "NotFound"]


def test_complete_and_toggle(service, make_user, make_event) -> None:
    event = make_event(make_user())

    assert service.complete(event.id).is_completed is True
    assert service.toggle_completion(event.id).is_completed is False
    with pytest.raises(NotFound):
        service.complete(12345)


def test_bulk_complete(service, make_user, make_event) -> None:
    owner = make_user()
    events = [make_event(owner) for _ in range(3)]
    ids = [event.id for event in events]

    result = service.bulk_complete([ids[0], 999, ids[2]], owner.id)

    assert result.succeeded == [ids[0], ids[2]]
    assert [f.event_id for f in result.failed] == [999]
    assert [e.id for e in service.get_completed()] == [ids[0], ids[2]]


def test_follow_up_uses_default_period(service, make_user, make_event) -> None:
    owner = make_user()
    source = make_event(owner, description="Sprint review", can_be_postponed=False)

    follow_up = service.follow_up(source.id, owner.id)

    assert follow_up.id != source.id
    assert follow_up.title == source.title
    assert follow_up.description == "Sprint review"
    assert follow_up.can_be_postponed is False
    assert follow_up.is_completed is False
    assert follow_up.created_by_id == owner.id
    assert follow_up.start_date_time == EVENT_START + timedelta(days=7)
    assert service.user_event_exists(owner.id, follow_up.id)


def test_follow_up_uses_user_settings(service, make_user, make_event) -> None:
    owner = make_user()
    EventSettingsRepository(service.session).add(
        EventSettings(user_id=owner.id, follow_up_period_days=14)
    )
    source = make_event(owner)

    follow_up = service.follow_up(source.id, owner.id)

    assert follow_up.start_date_time == EVENT_START + timedelta(days=14)
    assert follow_up.end_date_time == EVENT_START + timedelta(days=14, hours=1)


def test_bulk_follow_up(service, make_user, make_event) -> None:
    owner = make_user("owner")
    other = make_user("other")
    mine = make_event(owner)
    theirs = make_event(other)
    before = service.events.count()

    result = service.bulk_follow_up([mine.id, theirs.id], owner.id)

    assert result.succeeded == [mine.id]
    assert [f.reason for f in result.failed] == ["Forbidden"]
    assert service.events.count() == before + 1


def test_create_validates_all_fields_at_once(service, make_user) -> None:
    owner = make_user()
    payload = EventCreate(
        title="",
        description="x" * 1001,
        start_date_time=EVENT_START,
        end_date_time=EVENT_START - timedelta(minutes=5),
    )

    with pytest.raises(ValidationFailed) as excinfo:
        service.create(payload, owner.id)

    assert len(excinfo.value.reasons) == 3


def test_create_with_user_is_atomic(service, make_user) -> None:
    owner = make_user()
    payload = EventCreateWithUser(
        title="Standup",
        start_date_time=EVENT_START,
        end_date_time=EVENT_START + timedelta(minutes=15),
        user_id=999,
    )

    with pytest.raises(ConstraintViolation) as excinfo:
        service.create_with_user(payload, owner.id)

    assert excinfo.value.field == "user_id"
    assert service.events.count() == 0


def test_update_is_partial_and_owner_only(service, make_user, make_event) -> None:
    owner = make_user("owner")
    other = make_user("other")
    event = make_event(owner)

    updated = service.update(event.id, EventUpdate(title="Renamed"), owner.id)

    assert updated.title == "Renamed"
    assert updated.start_date_time == EVENT_START
    with pytest.raises(NotFound):
        service.update(event.id, EventUpdate(title="Hijack"), other.id)
    with pytest.raises(ValidationFailed):
        service.update(
            event.id,
            EventUpdate(end_date_time=EVENT_START - timedelta(hours=1)),
            owner.id,
        )


def test_event_type_names_are_unique(service) -> None:
    service.create_event_type(EventTypeCreate(name="Meeting"))

    with pytest.raises(ConstraintViolation) as excinfo:
        service.create_event_type(EventTypeCreate(name="Meeting"))

    assert excinfo.value.field == "name"


def test_attendance_links(service, make_user, make_event) -> None:
    owner = make_user("owner")
    guest = make_user("guest")
    event = make_event(owner)

    service.add_user_event(guest.id, event.id)

    with pytest.raises(ConstraintViolation):
        service.add_user_event(guest.id, event.id)
    assert [e.id for e in service.get_attended_by(guest.id)] == [event.id]
    service.remove_user_event(guest.id, event.id)
    with pytest.raises(NotFound):
        service.remove_user_event(guest.id, event.id)
