"""
Use case: Update an event owned by the acting principal.

Input: UpdateEventCommand (principal, event_id, provided fields)
Output: Ok(Event), NotFound or Forbidden
Side effects: Updates one event row.
"""

import logging

from eventspotter.application.events.dtos import UpdateEventCommand
from eventspotter.domain.events.authorization import AuthorizationGuard
from eventspotter.domain.events.entities import EventChanges
from eventspotter.domain.events.outcomes import Ok, Outcome
from eventspotter.domain.events.ports import EventRepository

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "scheduled_date",
        "scheduled_time",
        "location_description",
        "organizer_name",
        "category",
        "tags",
        "external_url",
    }
)


class UpdateEventUseCase:
    """Authorizes, then applies a partial update."""

    def __init__(self, event_repo: EventRepository, guard: AuthorizationGuard) -> None:
        self._event_repo = event_repo
        self._guard = guard

    async def execute(self, command: UpdateEventCommand) -> Outcome:
        """Run the update event use case.

        Raises:
            ValueError: If the command carries a field that is not mutable.
        """
        unknown = set(command.changes) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        decision = await self._guard.authorize(command.event_id, command.principal, action="update")
        if not isinstance(decision, Ok):
            return decision

        event = await self._event_repo.update(command.event_id, EventChanges(dict(command.changes)))
        logger.info(
            "Event updated by owner: event_id=%s, user_id=%s, fields=%s",
            command.event_id,
            command.principal.id,
            sorted(command.changes),
        )
        return Ok(event)
