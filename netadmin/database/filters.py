"""Tagged query filters and their translation to SQLAlchemy predicates.

Services describe *what* to select with a small closed set of filter
variants combined with AND semantics; ``apply_filters`` is the only place
that knows how those variants become SQL.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Union

from sqlalchemy import Select
from sqlalchemy.orm import InstrumentedAttribute


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True)
class Range:
    """Inclusive range; at least one bound is required."""

    field: str
    gte: Any = None
    lte: Any = None

    def __post_init__(self) -> None:
        if self.gte is None and self.lte is None:
            raise ValueError(f"Range filter on '{self.field}' needs gte or lte")


@dataclass(frozen=True)
class ArrayContains:
    field: str
    value: Any


@dataclass(frozen=True)
class AnyOf:
    field: str
    values: tuple


QueryFilter = Union[Equals, Range, ArrayContains, AnyOf]


def _column(model: type, field: str) -> InstrumentedAttribute:
    column = getattr(model, field, None)
    if not isinstance(column, InstrumentedAttribute):
        raise ValueError(f"{model.__name__} has no mapped column '{field}'")
    return column


def to_predicate(model: type, query_filter: QueryFilter):
    """Translate one filter variant into a SQLAlchemy boolean clause."""
    column = _column(model, query_filter.field)

    if isinstance(query_filter, Equals):
        if query_filter.value is None:
            return column.is_(None)
        return column == query_filter.value

    if isinstance(query_filter, Range):
        if query_filter.gte is not None and query_filter.lte is not None:
            return column.between(query_filter.gte, query_filter.lte)
        if query_filter.gte is not None:
            return column >= query_filter.gte
        return column <= query_filter.lte

    if isinstance(query_filter, ArrayContains):
        return column.contains([query_filter.value])

    if isinstance(query_filter, AnyOf):
        return column.in_(list(query_filter.values))

    raise TypeError(f"Unsupported query filter: {query_filter!r}")


def apply_filters(stmt: Select, model: type, filters: Iterable[QueryFilter]) -> Select:
    """AND every filter onto ``stmt``."""
    predicates = [to_predicate(model, f) for f in filters]
    if predicates:
        stmt = stmt.where(*predicates)
    return stmt


def apply_ordering(stmt: Select, model: type, field: str, *, descending: bool = True) -> Select:
    column = _column(model, field)
    return stmt.order_by(column.desc() if descending else column.asc())
