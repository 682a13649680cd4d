"""
Tagged outcomes returned by the authorization guard and relation mutator.

Expected results (missing target, foreign owner, duplicate save, full table)
are values, not exceptions. Only unexpected faults are raised.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The operation succeeded; ``value`` carries its result (may be None)."""

    value: T


@dataclass(frozen=True)
class NotFound:
    """The addressed event does not exist."""

    message: str = "Event not found."


@dataclass(frozen=True)
class Forbidden:
    """The event exists but belongs to someone else."""

    message: str = "You are not authorized to modify this event."


@dataclass(frozen=True)
class AlreadySaved:
    """The save relation already existed. This is a success variant."""

    message: str = "Event already saved."


@dataclass(frozen=True)
class CapacityExceeded:
    """The admission cap was reached before any read of the target."""

    message: str
    limit: int


Outcome = Union[Ok[Any], NotFound, Forbidden, AlreadySaved, CapacityExceeded]

FAILURES = (NotFound, Forbidden, CapacityExceeded)


def is_failure(outcome: Outcome) -> bool:
    """Return True for outcomes that must be reported as client errors."""
    return isinstance(outcome, FAILURES)
