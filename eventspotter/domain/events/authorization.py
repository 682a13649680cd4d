"""
Domain service: Ownership-based authorization for event mutations.

Lookup runs before the ownership check, so a missing event is reported
as NotFound to every caller, owner or not.
"""

import logging
from uuid import UUID

from eventspotter.domain.accounts.entities import Principal
from eventspotter.domain.events.outcomes import Forbidden, NotFound, Ok, Outcome
from eventspotter.domain.events.ports import EventRepository

logger = logging.getLogger(__name__)


class AuthorizationGuard:
    """Decides whether a principal may mutate an event."""

    def __init__(self, event_repo: EventRepository) -> None:
        self._event_repo = event_repo

    async def authorize(self, event_id: UUID, principal: Principal, action: str = "modify") -> Outcome:
        """Return ``Ok(event)`` when ``principal`` owns the event.

        Args:
            event_id: The event to be mutated.
            principal: The acting, already-authenticated principal.
            action: Verb used in the Forbidden message ("update", "delete").

        Returns:
            Ok(event), NotFound, or Forbidden. Only Ok permits the mutation.
        """
        event = await self._event_repo.get_by_id(event_id)
        if event is None:
            logger.info(
                "Authorization lookup failed: event_id=%s, user_id=%s, action=%s",
                event_id,
                principal.id,
                action,
            )
            return NotFound()

        if event.owner_id != principal.id:
            logger.warning(
                "Ownership check failed: event_id=%s, owner_id=%s, user_id=%s, action=%s",
                event_id,
                event.owner_id,
                principal.id,
                action,
            )
            return Forbidden(message=f"You are not authorized to {action} this event.")

        return Ok(event)
