from __future__ import annotations

from schedule_server.models import Permission, Role, RolePermission, UserRole
from schedule_server.repositories import RoleRepository, UserRoleRepository
from schedule_server.services.permissions import (
    get_user_permission_names,
    has_permission,
)


def test_permission_through_any_role(session, make_user, grant) -> None:
    user = make_user()
    grant(user, "Viewer")
    grant(user, "Admin")

    assert has_permission(session, user.id, "Admin")
    assert has_permission(session, user.id, "Viewer")
    assert get_user_permission_names(session, user.id) == ["Admin", "Viewer"]


def test_missing_permission_is_false(session, make_user, grant) -> None:
    user = make_user()
    grant(user, "Viewer")

    assert not has_permission(session, user.id, "Admin")


def test_unknown_inputs_are_false_not_errors(session, make_user) -> None:
    user = make_user()

    assert not has_permission(session, user.id, "Admin")
    assert not has_permission(session, 9999, "Admin")
    assert not has_permission(session, 0, "Admin")
    assert not has_permission(session, -3, "Admin")
    assert not has_permission(session, user.id, "")


def test_revoking_role_revokes_permission(session, make_user, grant) -> None:
    user = make_user()
    role = grant(user, "ActiveUser")
    assert has_permission(session, user.id, "ActiveUser")

    UserRoleRepository(session).remove_user_role(user.id, role.id)

    assert not has_permission(session, user.id, "ActiveUser")


def test_permission_of_another_users_role_does_not_leak(session, make_user) -> None:
    alice = make_user("alice")
    bob = make_user("bob")
    role = RoleRepository(session).add(Role(name="Admins"))
    permission = Permission(name="Admin")
    session.add(permission)
    session.commit()
    session.add(RolePermission(role_id=role.id, permission_id=permission.id))
    session.add(UserRole(user_id=bob.id, role_id=role.id))
    session.commit()

    assert has_permission(session, bob.id, "Admin")
    assert not has_permission(session, alice.id, "Admin")
