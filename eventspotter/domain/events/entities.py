"""
Domain entities for the events bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Optional
from uuid import UUID


class SortField(Enum):
    """Fields an event listing may be sorted by."""

    SCHEDULED_DATE = "scheduledDate"
    TITLE = "title"
    CREATED_AT = "createdAt"
    ORGANIZER_NAME = "organizerName"
    CATEGORY = "category"


class SortOrder(Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Event:
    """A scheduled event listed by its owner.

    ``owner_id`` is fixed at creation; no update path accepts it.
    """

    id: UUID
    owner_id: UUID
    title: str
    description: str
    scheduled_date: date
    scheduled_time: Optional[time]
    location_description: str
    organizer_name: str
    category: str
    tags: tuple[str, ...]
    external_url: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NewEvent:
    """Field values for an event that has not been persisted yet."""

    owner_id: UUID
    title: str
    description: str
    scheduled_date: date
    scheduled_time: Optional[time]
    location_description: str
    organizer_name: str
    category: str
    tags: tuple[str, ...] = ()
    external_url: Optional[str] = None


@dataclass(frozen=True)
class EventChanges:
    """Partial update of an event.

    Only the names listed in ``fields`` are written. This keeps
    "set to null" distinct from "not provided" for nullable columns.
    """

    values: dict = field(default_factory=dict)

    @property
    def fields(self) -> frozenset[str]:
        return frozenset(self.values)

    def is_empty(self) -> bool:
        return not self.values


@dataclass(frozen=True)
class SavedEvent:
    """A user's bookmark of an event. Unique per (user_id, event_id)."""

    user_id: UUID
    event_id: UUID
    saved_at: datetime


@dataclass(frozen=True)
class EventPage:
    """One page of a filtered, sorted event listing.

    Attributes:
        items: Events on this page, at most ``limit`` of them.
        total_count: Number of events matching the filter across all pages.
        total_pages: ceil(total_count / limit); 0 when nothing matched.
        current_page: The 1-based page that was requested.
        limit: Page size.
    """

    items: list[Event]
    total_count: int
    total_pages: int
    current_page: int
    limit: int
