"""
Data Transfer Objects for the events application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior. Each command is the
typed, already-validated form of one API operation's input; no
use case accepts an untyped payload.

The listing query type (EventQuery) lives with the query compiler
in the domain layer and is re-exported here.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Optional
from uuid import UUID

from eventspotter.domain.accounts.entities import Principal
from eventspotter.domain.events.query_compiler import EventQuery

ListEventsQuery = EventQuery


@dataclass(frozen=True)
class GetEventQuery:
    """Input DTO for fetching one event.

    Attributes:
        event_id: UUID of the event.
    """

    event_id: UUID


@dataclass(frozen=True)
class CreateEventCommand:
    """Input DTO for creating an event.

    Attributes:
        principal: The authenticated creator; becomes the owner.
        title: Event title (3-255 chars).
        description: Event description (10+ chars).
        scheduled_date: Calendar date of the event.
        scheduled_time: Optional time of day.
        location_description: Where the event happens.
        organizer_name: Organizer; None means the principal's display name.
        category: Category label.
        tags: Free-form tags.
        external_url: Optional website.
    """

    principal: Principal
    title: str
    description: str
    scheduled_date: date
    location_description: str
    category: str
    scheduled_time: Optional[time] = None
    organizer_name: Optional[str] = None
    tags: tuple[str, ...] = ()
    external_url: Optional[str] = None


@dataclass(frozen=True)
class UpdateEventCommand:
    """Input DTO for a partial event update.

    Attributes:
        principal: The acting principal; must own the event.
        event_id: UUID of the event to update.
        changes: Provided fields only, keyed by Event attribute name.
    """

    principal: Principal
    event_id: UUID
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeleteEventCommand:
    """Input DTO for deleting an event."""

    principal: Principal
    event_id: UUID


@dataclass(frozen=True)
class SaveEventCommand:
    """Input DTO for saving (bookmarking) an event."""

    principal: Principal
    event_id: UUID


@dataclass(frozen=True)
class UnsaveEventCommand:
    """Input DTO for removing a saved event."""

    principal: Principal
    event_id: UUID


@dataclass(frozen=True)
class BatchGetEventsQuery:
    """Input DTO for fetching several events at once.

    Attributes:
        event_ids: One or more event UUIDs; unknown IDs are skipped.
    """

    event_ids: tuple[UUID, ...]


@dataclass(frozen=True)
class SaveEventResult:
    """Output DTO for a save.

    Attributes:
        created: True when a new relation was written, False if it existed.
        message: Human-readable confirmation.
    """

    created: bool
    message: str
