"""
Generic repository with CRUD, predicate queries and paging.

Every specialized repository extends ``GenericRepository`` and only adds
entity-specific convenience queries built on ``find`` / ``any``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field as dataclass_field
from typing import Generic, Iterable, List, Optional, Sequence, TypeVar

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from schedule_server.core.exceptions import (
    ApplicationError,
    ConstraintViolation,
    InvalidArgument,
    NotFound,
)
from schedule_server.models import BaseFields, utcnow
from schedule_server.repositories.referential import ReferentialPolicy, default_policy
from schedule_server.repositories.specification import Predicate

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=BaseFields)

_SERVER_MANAGED = ("id", "created_at", "updated_at")

_SQLITE_COLUMNS = re.compile(
    r"(?:UNIQUE|NOT NULL) constraint failed: (?P<columns>[\w.]+(?:, [\w.]+)*)"
)
_SQLITE_CHECK = re.compile(r"CHECK constraint failed: (?P<name>\w+)")
_POSTGRES_KEY = re.compile(r"Key \((?P<columns>[^)]+)\)")


def constraint_field(exc: IntegrityError) -> str:
    """Best-effort name of the column(s) behind an IntegrityError."""
    text = str(exc.orig)

    match = _SQLITE_COLUMNS.search(text)
    if match:
        columns = [part.strip().split(".")[-1] for part in match.group("columns").split(",")]
        return ", ".join(columns)

    match = _SQLITE_CHECK.search(text)
    if match:
        return match.group("name")

    diag = getattr(exc.orig, "diag", None)
    if diag is not None:
        if getattr(diag, "column_name", None):
            return diag.column_name
        detail = getattr(diag, "message_detail", None) or ""
        match = _POSTGRES_KEY.search(detail)
        if match:
            return match.group("columns")
        if getattr(diag, "constraint_name", None):
            return diag.constraint_name

    return "unknown"


def commit_or_raise(session: Session, resource: str) -> None:
    """Commit, translating integrity errors after rolling back."""
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        failed_field = constraint_field(exc)
        logger.info(f"Constraint violation on {resource}.{failed_field}: {exc.orig}")
        raise ConstraintViolation(resource, failed_field) from exc


def flush_or_raise(session: Session, resource: str) -> None:
    try:
        session.flush()
    except IntegrityError as exc:
        session.rollback()
        raise ConstraintViolation(resource, constraint_field(exc)) from exc


@dataclass
class Page(Generic[ModelType]):
    """One page of results plus the size of the whole result set."""

    items: List[ModelType] = dataclass_field(default_factory=list)
    total_count: int = 0
    page_number: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        if self.total_count <= 0:
            return 0
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages


class GenericRepository(Generic[ModelType]):
    """
    Typed CRUD over one table.

    Writes commit immediately unless called with ``commit=False``, in which
    case they only flush so that several writes can share one transaction.

    Example:
        class RoleRepository(GenericRepository[Role]):
            def __init__(self, session: Session):
                super().__init__(Role, session)

            def get_by_name(self, name: str) -> Optional[Role]:
                return self.first(field("name") == name)
    """

    def __init__(
        self,
        model: type[ModelType],
        session: Session,
        policy: ReferentialPolicy = default_policy,
    ):
        self.model = model
        self.session = session
        self.policy = policy

    @property
    def resource(self) -> str:
        return self.model.__name__

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.session.get(self.model, id)

    def get_required(self, id: int) -> ModelType:
        entity = self.get_by_id(id)
        if entity is None:
            raise NotFound(self.resource, id)
        return entity

    def get_all(self) -> List[ModelType]:
        return list(self.session.exec(select(self.model).order_by(self.model.id)).all())

    def get_paged(self, page_number: int, page_size: int) -> Page[ModelType]:
        return self._paged(None, page_number, page_size)

    def find_paged(
        self, predicate: Predicate, page_number: int, page_size: int
    ) -> Page[ModelType]:
        self._require_predicate(predicate)
        return self._paged(predicate, page_number, page_size)

    def find(self, predicate: Predicate) -> List[ModelType]:
        self._require_predicate(predicate)
        statement = (
            select(self.model)
            .where(predicate.to_clause(self.model))
            .order_by(self.model.id)
        )
        return list(self.session.exec(statement).all())

    def first(self, predicate: Predicate) -> Optional[ModelType]:
        self._require_predicate(predicate)
        statement = (
            select(self.model)
            .where(predicate.to_clause(self.model))
            .order_by(self.model.id)
            .limit(1)
        )
        return self.session.exec(statement).first()

    def count(self, predicate: Optional[Predicate] = None) -> int:
        statement = select(func.count()).select_from(self.model)
        if predicate is not None:
            statement = statement.where(predicate.to_clause(self.model))
        return self.session.exec(statement).one()

    def any(self, predicate: Predicate) -> bool:
        self._require_predicate(predicate)
        statement = (
            select(self.model.id).where(predicate.to_clause(self.model)).limit(1)
        )
        return self.session.exec(statement).first() is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add(self, entity: ModelType, *, commit: bool = True) -> ModelType:
        now = utcnow()
        entity.created_at = now
        entity.updated_at = now
        self._check(entity)
        self.session.add(entity)
        self._save(commit)
        self.session.refresh(entity)
        return entity

    def add_range(
        self, entities: Iterable[ModelType], *, commit: bool = True
    ) -> List[ModelType]:
        """Insert all entities or none of them."""
        if entities is None:
            raise InvalidArgument("entities must not be None.")
        batch = list(entities)
        now = utcnow()
        for entity in batch:
            entity.created_at = now
            entity.updated_at = now
            self._check(entity)

        self.session.add_all(batch)
        self._save(commit)
        for entity in batch:
            self.session.refresh(entity)
        return batch

    def update(self, entity: ModelType, *, commit: bool = True) -> ModelType:
        """Replace all mutable fields of the stored row with ``entity``'s."""
        if entity.id is None:
            raise NotFound(self.resource, None)
        existing = self.session.get(self.model, entity.id)
        if existing is None:
            raise NotFound(self.resource, entity.id)

        if existing is not entity:
            for name in self._mutable_columns():
                setattr(existing, name, getattr(entity, name))
        existing.touch()
        self._check(existing)
        self.session.add(existing)
        self._save(commit)
        self.session.refresh(existing)
        return existing

    def delete(self, entity: ModelType, *, commit: bool = True) -> None:
        existing = self.session.get(self.model, entity.id) if entity.id else None
        if existing is None:
            raise NotFound(self.resource, entity.id)
        self.policy.apply_on_delete(self.session, self.model, [existing.id])
        self.session.delete(existing)
        self._save(commit)

    def delete_range(self, entities: Iterable[ModelType], *, commit: bool = True) -> None:
        """Delete whatever of ``entities`` still exists; absent ids are skipped."""
        if entities is None:
            raise InvalidArgument("entities must not be None.")
        ids = [entity.id for entity in entities if entity.id is not None]
        self._delete_ids(ids, commit)

    def delete_all(self, *, commit: bool = True) -> None:
        """Clear the table. Maintenance and seed paths only."""
        ids = list(self.session.exec(select(self.model.id)).all())
        logger.warning(f"Deleting all {len(ids)} rows of {self.resource}")
        self._delete_ids(ids, commit)

    # ------------------------------------------------------------------
    # Hooks and helpers
    # ------------------------------------------------------------------

    def validate_entity(self, entity: ModelType) -> None:
        """Entity-level invariants; override to raise ConstraintViolation."""

    def _check(self, entity: ModelType) -> None:
        try:
            with self.session.no_autoflush:
                self.validate_entity(entity)
                self.policy.check_references(self.session, entity)
        except ApplicationError:
            self.session.rollback()
            raise

    def _save(self, commit: bool) -> None:
        if commit:
            commit_or_raise(self.session, self.resource)
        else:
            flush_or_raise(self.session, self.resource)

    def _delete_ids(self, ids: Sequence[int], commit: bool) -> None:
        present = (
            list(self.session.exec(select(self.model.id).where(self.model.id.in_(ids))).all())
            if ids
            else []
        )
        if present:
            self.policy.apply_on_delete(self.session, self.model, present)
            self.session.exec(delete(self.model).where(self.model.id.in_(present)))
        self._save(commit)

    def _paged(
        self, predicate: Optional[Predicate], page_number: int, page_size: int
    ) -> Page[ModelType]:
        if page_size <= 0:
            raise InvalidArgument("page_size must be greater than 0.")
        if page_number < 1:
            raise InvalidArgument("page_number must be 1 or greater.")

        statement = select(self.model)
        if predicate is not None:
            statement = statement.where(predicate.to_clause(self.model))
        statement = (
            statement.order_by(self.model.id)
            .offset((page_number - 1) * page_size)
            .limit(page_size)
        )
        return Page(
            items=list(self.session.exec(statement).all()),
            total_count=self.count(predicate),
            page_number=page_number,
            page_size=page_size,
        )

    def _mutable_columns(self) -> List[str]:
        return [
            column.key
            for column in self.model.__table__.columns
            if column.key not in _SERVER_MANAGED
        ]

    @staticmethod
    def _require_predicate(predicate: Optional[Predicate]) -> None:
        if predicate is None:
            raise InvalidArgument("predicate must not be None.")
