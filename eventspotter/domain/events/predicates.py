"""
Filter predicate tree and sort key for event queries.

The tree is plain data. Adapters translate it into their own query
language; the domain never builds SQL. Field names are Event
attribute names.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Union

from eventspotter.domain.events.entities import SortOrder


@dataclass(frozen=True)
class Equals:
    """``field == value`` (exact match)."""

    field: str
    value: Any


@dataclass(frozen=True)
class HasAny:
    """The collection ``field`` shares at least one element with ``values``."""

    field: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class OnOrAfter:
    """``field >= value``."""

    field: str
    value: date


@dataclass(frozen=True)
class OnOrBefore:
    """``field <= value``."""

    field: str
    value: date


@dataclass(frozen=True)
class ContainsText:
    """Case-insensitive substring match of ``term`` in ``field``."""

    field: str
    term: str


@dataclass(frozen=True)
class AnyOf:
    """Logical OR of the child predicates."""

    predicates: tuple["Predicate", ...]


@dataclass(frozen=True)
class AllOf:
    """Logical AND of the child predicates. Empty means no filter."""

    predicates: tuple["Predicate", ...] = ()

    def is_empty(self) -> bool:
        return not self.predicates


Predicate = Union[Equals, HasAny, OnOrAfter, OnOrBefore, ContainsText, AnyOf, AllOf]


@dataclass(frozen=True)
class Sort:
    """Single-key ordering. Ties resolve in data-store order."""

    field: str
    order: SortOrder
