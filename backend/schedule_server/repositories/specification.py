"""
Composable filter predicates for repositories.

A predicate is a small boolean-expression tree over entity fields. It can be
rendered to a SQLAlchemy clause for a given model (``to_clause``) or evaluated
directly against an entity instance (``matches``); both give the same answer.
Every leaf renders to a clause that is TRUE or FALSE, never NULL, so ``~``
behaves the same in SQL as in Python when a column is NULL.

    from schedule_server.repositories.specification import field

    upcoming = (field("start_date_time") >= now) & ~field("is_completed").is_true()
    events_repo.find(upcoming)
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Iterable, Sequence

from sqlalchemy import and_, false, not_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from schedule_server.core.exceptions import InvalidArgument

_COMPARATORS: dict[str, Callable[[Any, Any], Any]] = {
    "eq": operator.eq,
    "ne": operator.ne,
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
}


def _column(model: type, name: str):
    columns = getattr(model, "__table__").columns
    if name not in columns:
        raise InvalidArgument(f"Unknown field '{name}' for {model.__name__}.")
    return getattr(model, name)


def _value(entity: Any, name: str) -> Any:
    if not hasattr(entity, name):
        raise InvalidArgument(
            f"Unknown field '{name}' for {type(entity).__name__}."
        )
    return getattr(entity, name)


class Predicate:
    """Base node. Combine with ``&``, ``|`` and ``~``."""

    def to_clause(self, model: type) -> ColumnElement[bool]:
        raise NotImplementedError

    def matches(self, entity: Any) -> bool:
        raise NotImplementedError

    def __and__(self, other: Predicate) -> Predicate:
        return And([self, other])

    def __or__(self, other: Predicate) -> Predicate:
        return Or([self, other])

    def __invert__(self) -> Predicate:
        return Not(self)


class Comparison(Predicate):
    def __init__(self, name: str, op: str, value: Any):
        if op not in _COMPARATORS:
            raise InvalidArgument(f"Unsupported comparison '{op}'.")
        self.name = name
        self.op = op
        self.value = value

    def to_clause(self, model: type) -> ColumnElement[bool]:
        column = _column(model, self.name)
        if self.value is None:
            if self.op == "eq":
                return column.is_(None)
            if self.op == "ne":
                return column.is_not(None)
            return false()
        compared = _COMPARATORS[self.op](column, self.value)
        if self.op == "ne":
            return or_(column.is_(None), compared)
        return and_(column.is_not(None), compared)

    def matches(self, entity: Any) -> bool:
        current = _value(entity, self.name)
        if self.op in ("eq", "ne"):
            return bool(_COMPARATORS[self.op](current, self.value))
        # SQL semantics: comparing NULL never holds
        if current is None or self.value is None:
            return False
        return bool(_COMPARATORS[self.op](current, self.value))

    def __repr__(self) -> str:
        return f"Comparison({self.name!r}, {self.op!r}, {self.value!r})"


class In(Predicate):
    def __init__(self, name: str, values: Iterable[Any]):
        self.name = name
        self.values = list(values)

    def to_clause(self, model: type) -> ColumnElement[bool]:
        column = _column(model, self.name)
        present = [value for value in self.values if value is not None]
        clause = and_(column.is_not(None), column.in_(present)) if present else false()
        if len(present) < len(self.values):
            return or_(column.is_(None), clause)
        return clause

    def matches(self, entity: Any) -> bool:
        return _value(entity, self.name) in self.values


class IsNull(Predicate):
    def __init__(self, name: str):
        self.name = name

    def to_clause(self, model: type) -> ColumnElement[bool]:
        return _column(model, self.name).is_(None)

    def matches(self, entity: Any) -> bool:
        return _value(entity, self.name) is None


class Contains(Predicate):
    """Case-insensitive substring match on a text field."""

    def __init__(self, name: str, fragment: str):
        self.name = name
        self.fragment = fragment

    def to_clause(self, model: type) -> ColumnElement[bool]:
        column = _column(model, self.name)
        return and_(
            column.is_not(None), column.icontains(self.fragment, autoescape=True)
        )

    def matches(self, entity: Any) -> bool:
        current = _value(entity, self.name)
        if current is None:
            return False
        return self.fragment.lower() in str(current).lower()


class And(Predicate):
    def __init__(self, parts: Sequence[Predicate]):
        self.parts = list(parts)

    def to_clause(self, model: type) -> ColumnElement[bool]:
        if not self.parts:
            return true()
        return and_(*(part.to_clause(model) for part in self.parts))

    def matches(self, entity: Any) -> bool:
        return all(part.matches(entity) for part in self.parts)

    def __and__(self, other: Predicate) -> Predicate:
        return And([*self.parts, other])


class Or(Predicate):
    def __init__(self, parts: Sequence[Predicate]):
        self.parts = list(parts)

    def to_clause(self, model: type) -> ColumnElement[bool]:
        if not self.parts:
            return false()
        return or_(*(part.to_clause(model) for part in self.parts))

    def matches(self, entity: Any) -> bool:
        return any(part.matches(entity) for part in self.parts)

    def __or__(self, other: Predicate) -> Predicate:
        return Or([*self.parts, other])


class Not(Predicate):
    def __init__(self, inner: Predicate):
        self.inner = inner

    def to_clause(self, model: type) -> ColumnElement[bool]:
        return not_(self.inner.to_clause(model))

    def matches(self, entity: Any) -> bool:
        return not self.inner.matches(entity)


class FieldRef:
    """Entry point for building comparisons on a named field."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, value: Any) -> Predicate:  # type: ignore[override]
        if value is None:
            return IsNull(self.name)
        return Comparison(self.name, "eq", value)

    def __ne__(self, value: Any) -> Predicate:  # type: ignore[override]
        if value is None:
            return Not(IsNull(self.name))
        return Comparison(self.name, "ne", value)

    def __lt__(self, value: Any) -> Predicate:
        return Comparison(self.name, "lt", value)

    def __le__(self, value: Any) -> Predicate:
        return Comparison(self.name, "le", value)

    def __gt__(self, value: Any) -> Predicate:
        return Comparison(self.name, "gt", value)

    def __ge__(self, value: Any) -> Predicate:
        return Comparison(self.name, "ge", value)

    def in_(self, values: Iterable[Any]) -> Predicate:
        return In(self.name, values)

    def is_null(self) -> Predicate:
        return IsNull(self.name)

    def is_true(self) -> Predicate:
        return Comparison(self.name, "eq", True)

    def contains(self, fragment: str) -> Predicate:
        return Contains(self.name, fragment)


def field(name: str) -> FieldRef:
    return FieldRef(name)


def all_of(*parts: Predicate) -> Predicate:
    return And(parts)


def any_of(*parts: Predicate) -> Predicate:
    return Or(parts)
