"""
Referential policy between tables.

The schema declares the same ``ondelete`` behaviour on its foreign keys, but
the repository applies these rules itself so that cascades and set-null
updates happen identically on every backend and inside the repository's own
transaction.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from sqlalchemy import delete, update
from sqlmodel import Session, SQLModel, select

from schedule_server.core.exceptions import ConstraintViolation
from schedule_server.models import (
    Event,
    EventSettings,
    EventType,
    Permission,
    Role,
    RolePermission,
    User,
    UserEvent,
    UserRole,
    utcnow,
)

logger = logging.getLogger(__name__)


class OnDelete(str, enum.Enum):
    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"


@dataclass(frozen=True)
class ForeignKeyRule:
    child: type[SQLModel]
    column: str
    parent: type[SQLModel]
    on_delete: OnDelete


REFERENTIAL_RULES: tuple[ForeignKeyRule, ...] = (
    ForeignKeyRule(UserRole, "user_id", User, OnDelete.CASCADE),
    ForeignKeyRule(UserRole, "role_id", Role, OnDelete.CASCADE),
    ForeignKeyRule(RolePermission, "role_id", Role, OnDelete.CASCADE),
    ForeignKeyRule(RolePermission, "permission_id", Permission, OnDelete.CASCADE),
    ForeignKeyRule(Event, "event_type_id", EventType, OnDelete.SET_NULL),
    ForeignKeyRule(Event, "created_by_id", User, OnDelete.SET_NULL),
    ForeignKeyRule(UserEvent, "user_id", User, OnDelete.CASCADE),
    ForeignKeyRule(UserEvent, "event_id", Event, OnDelete.CASCADE),
    ForeignKeyRule(EventSettings, "user_id", User, OnDelete.CASCADE),
)


class ReferentialPolicy:
    """Applies a rule table on delete and checks parents on write."""

    def __init__(self, rules: Sequence[ForeignKeyRule] = REFERENTIAL_RULES):
        self.rules = tuple(rules)

    def rules_for_parent(self, parent: type[SQLModel]) -> list[ForeignKeyRule]:
        return [rule for rule in self.rules if rule.parent is parent]

    def rules_for_child(self, child: type[SQLModel]) -> list[ForeignKeyRule]:
        return [rule for rule in self.rules if rule.child is child]

    def check_references(self, session: Session, entity: SQLModel) -> None:
        """Raise ConstraintViolation if a non-null foreign key dangles."""
        for rule in self.rules_for_child(type(entity)):
            value = getattr(entity, rule.column)
            if value is None:
                continue
            if session.get(rule.parent, value) is None:
                raise ConstraintViolation(
                    type(entity).__name__,
                    rule.column,
                    f"{rule.parent.__name__} with ID {value} does not exist.",
                )

    def apply_on_delete(
        self, session: Session, parent: type[SQLModel], parent_ids: Iterable[int]
    ) -> None:
        """Cascade or null out rows referencing ``parent_ids``. Does not commit."""
        ids = list(parent_ids)
        if not ids:
            return

        for rule in self.rules_for_parent(parent):
            column = getattr(rule.child, rule.column)
            if rule.on_delete is OnDelete.SET_NULL:
                session.exec(
                    update(rule.child)
                    .where(column.in_(ids))
                    .values({rule.column: None, "updated_at": utcnow()})
                )
                continue

            child_ids = list(
                session.exec(select(rule.child.id).where(column.in_(ids))).all()
            )
            if not child_ids:
                continue
            self.apply_on_delete(session, rule.child, child_ids)
            session.exec(delete(rule.child).where(rule.child.id.in_(child_ids)))
            logger.debug(
                f"Cascaded delete of {len(child_ids)} {rule.child.__name__} rows "
                f"from {parent.__name__}"
            )


default_policy = ReferentialPolicy()
