"""
Port interfaces (ABCs) for the events bounded context.

Ports define the contracts that the domain requires from the data store.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.

Every method is a coroutine: the domain suspends only at these calls.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, Optional
from uuid import UUID

from eventspotter.domain.events.entities import (
    Event,
    EventChanges,
    NewEvent,
    SavedEvent,
)
from eventspotter.domain.events.predicates import Predicate, Sort


class EventReader(ABC):
    """Read-only view over events, bound to one consistent snapshot."""

    @abstractmethod
    async def find(
        self, predicate: Predicate, sort: Sort, skip: int, take: int
    ) -> list[Event]:
        """Return at most ``take`` events matching ``predicate`` after skipping ``skip``."""
        raise NotImplementedError

    @abstractmethod
    async def count(self, predicate: Predicate) -> int:
        """Return the number of events matching ``predicate``."""
        raise NotImplementedError


class EventRepository(ABC):
    """Port for event persistence."""

    @abstractmethod
    def snapshot(self) -> AsyncContextManager[EventReader]:
        """Open a reader whose reads all observe the same committed state.

        Usage::

            async with repo.snapshot() as reader:
                items = await reader.find(...)
                total = await reader.count(...)
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, event_id: UUID) -> Optional[Event]:
        """Return an event by its ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    async def exists(self, event_id: UUID) -> bool:
        """Return True if an event with this ID exists."""
        raise NotImplementedError

    @abstractmethod
    async def get_many(self, event_ids: list[UUID]) -> list[Event]:
        """Return the events whose IDs are in ``event_ids``. Unknown IDs are skipped."""
        raise NotImplementedError

    @abstractmethod
    async def count_all(self) -> int:
        """Return the total number of stored events."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, new_event: NewEvent) -> Event:
        """Persist a new event.

        Raises:
            UniqueViolationError: A uniqueness constraint rejected the row.
            ForeignKeyViolationError: The owner does not exist.
        """
        raise NotImplementedError

    @abstractmethod
    async def update(self, event_id: UUID, changes: EventChanges) -> Event:
        """Apply ``changes`` and return the updated event.

        Raises:
            RecordNotFoundError: No event with this ID exists.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, event_id: UUID) -> None:
        """Delete an event.

        Raises:
            RecordNotFoundError: No event with this ID exists.
        """
        raise NotImplementedError

    @abstractmethod
    async def distinct_categories(self) -> list[str]:
        """Return every distinct category value, unordered."""
        raise NotImplementedError

    @abstractmethod
    async def tag_lists(self) -> list[tuple[str, ...]]:
        """Return the raw tag tuple of every event that has at least one tag."""
        raise NotImplementedError

    @abstractmethod
    async def get_at_offset(self, offset: int) -> Optional[Event]:
        """Return the event at ``offset`` in storage order, or None past the end."""
        raise NotImplementedError


class SavedEventRepository(ABC):
    """Port for the user <-> event saved relation."""

    @abstractmethod
    async def count_all(self) -> int:
        """Return the number of saved relations across all users."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, user_id: UUID, event_id: UUID) -> Optional[SavedEvent]:
        """Return the relation for this (user, event) pair, or None."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, user_id: UUID, event_id: UUID) -> SavedEvent:
        """Insert a relation.

        Raises:
            UniqueViolationError: The pair is already saved.
            ForeignKeyViolationError: The user or event no longer exists.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, user_id: UUID, event_id: UUID) -> None:
        """Delete a relation.

        Raises:
            RecordNotFoundError: The pair was not saved.
        """
        raise NotImplementedError

    @abstractmethod
    async def list_events_for_user(self, user_id: UUID) -> list[Event]:
        """Return the events a user saved, most recently saved first."""
        raise NotImplementedError
