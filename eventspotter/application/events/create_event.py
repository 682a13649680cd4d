"""
Use case: Create an event owned by the acting principal.

Input: CreateEventCommand
Output: Ok(Event) or CapacityExceeded
Side effects: Inserts one event row.
Failure cases: CapacityExceeded when the event cap is reached;
UniqueViolationError / ForeignKeyViolationError propagate for classification.
"""

import logging

from eventspotter.application.events.dtos import CreateEventCommand
from eventspotter.domain.events.entities import NewEvent
from eventspotter.domain.events.outcomes import CapacityExceeded, Ok, Outcome
from eventspotter.domain.events.ports import EventRepository

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_CAP = 500


class CreateEventUseCase:
    """Orchestrates event creation under a soft admission cap."""

    def __init__(self, event_repo: EventRepository, capacity: int = DEFAULT_EVENTS_CAP) -> None:
        """Initialize the use case.

        Args:
            event_repo: Event persistence port.
            capacity: Soft cap on the total number of events.
        """
        self._event_repo = event_repo
        self._capacity = capacity

    async def execute(self, command: CreateEventCommand) -> Outcome:
        """Run the create event use case.

        The organizer name falls back to the principal's display name.
        """
        current = await self._event_repo.count_all()
        if current >= self._capacity:
            logger.warning(
                "Event creation limit reached: current=%d, limit=%d", current, self._capacity
            )
            return CapacityExceeded(
                message="Event creation limit reached. Please try again later.",
                limit=self._capacity,
            )

        event = await self._event_repo.create(
            NewEvent(
                owner_id=command.principal.id,
                title=command.title,
                description=command.description,
                scheduled_date=command.scheduled_date,
                scheduled_time=command.scheduled_time,
                location_description=command.location_description,
                organizer_name=command.organizer_name or command.principal.display_name,
                category=command.category,
                tags=command.tags,
                external_url=command.external_url,
            )
        )
        logger.info(
            "Event created: event_id=%s, user_id=%s, title=%s",
            event.id,
            command.principal.id,
            event.title,
        )
        return Ok(event)
