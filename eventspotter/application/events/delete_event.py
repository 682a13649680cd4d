"""
Use case: Delete an event owned by the acting principal.

Input: DeleteEventCommand
Output: Ok(None), NotFound or Forbidden
Side effects: Deletes one event row (saved relations cascade in the store).
"""

import logging

from eventspotter.application.events.dtos import DeleteEventCommand
from eventspotter.domain.events.authorization import AuthorizationGuard
from eventspotter.domain.events.outcomes import Ok, Outcome
from eventspotter.domain.events.ports import EventRepository

logger = logging.getLogger(__name__)


class DeleteEventUseCase:
    """Authorizes, then deletes."""

    def __init__(self, event_repo: EventRepository, guard: AuthorizationGuard) -> None:
        self._event_repo = event_repo
        self._guard = guard

    async def execute(self, command: DeleteEventCommand) -> Outcome:
        decision = await self._guard.authorize(command.event_id, command.principal, action="delete")
        if not isinstance(decision, Ok):
            return decision

        await self._event_repo.delete(command.event_id)
        logger.info(
            "Event deleted by owner: event_id=%s, user_id=%s",
            command.event_id,
            command.principal.id,
        )
        return Ok(None)
