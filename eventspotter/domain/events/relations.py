"""
Domain service: Idempotent save/unsave of the user <-> event relation.

Save checks run in a fixed order and stop at the first decisive one:
    1. admission:   total saved relations >= cap  -> CapacityExceeded
    2. existence:   event missing                 -> NotFound
    3. idempotency: pair already saved            -> AlreadySaved
    4. create:      unique violation on insert    -> AlreadySaved

The admission count is an unlocked snapshot, so the cap is soft under
concurrency. The existence-then-create window is closed by the store's
uniqueness constraint.
"""

import logging
from uuid import UUID

from eventspotter.domain.errors import (
    ForeignKeyViolationError,
    RecordNotFoundError,
    UniqueViolationError,
)
from eventspotter.domain.events.outcomes import (
    AlreadySaved,
    CapacityExceeded,
    NotFound,
    Ok,
    Outcome,
)
from eventspotter.domain.events.ports import EventRepository, SavedEventRepository

logger = logging.getLogger(__name__)

DEFAULT_SAVED_EVENTS_CAP = 500


class RelationMutator:
    """Creates and removes saved-event relations."""

    def __init__(
        self,
        event_repo: EventRepository,
        saved_repo: SavedEventRepository,
        capacity: int = DEFAULT_SAVED_EVENTS_CAP,
    ) -> None:
        """Initialize the mutator.

        Args:
            event_repo: Used for the target existence check.
            saved_repo: Stores the relations.
            capacity: Soft cap on the total number of saved relations.
        """
        self._event_repo = event_repo
        self._saved_repo = saved_repo
        self._capacity = capacity

    async def save(self, user_id: UUID, event_id: UUID) -> Outcome:
        """Save ``event_id`` for ``user_id``.

        Returns:
            Ok(SavedEvent) for a new relation, AlreadySaved if it existed,
            NotFound, or CapacityExceeded.
        """
        current = await self._saved_repo.count_all()
        if current >= self._capacity:
            logger.warning(
                "Event saving limit reached: current=%d, limit=%d", current, self._capacity
            )
            return CapacityExceeded(
                message="Event saving limit reached. Please try again later.",
                limit=self._capacity,
            )

        if not await self._event_repo.exists(event_id):
            logger.warning(
                "Attempt to save non-existent event: user_id=%s, event_id=%s", user_id, event_id
            )
            return NotFound()

        if await self._saved_repo.get(user_id, event_id) is not None:
            logger.info("Event already saved: user_id=%s, event_id=%s", user_id, event_id)
            return AlreadySaved()

        try:
            saved = await self._saved_repo.create(user_id, event_id)
        except UniqueViolationError:
            logger.info(
                "Concurrent save resolved as already saved: user_id=%s, event_id=%s",
                user_id,
                event_id,
            )
            return AlreadySaved()
        except ForeignKeyViolationError as exc:
            logger.warning(
                "Event vanished during save: user_id=%s, event_id=%s, field=%s",
                user_id,
                event_id,
                exc.field_name,
            )
            return NotFound()

        logger.info("Event saved: user_id=%s, event_id=%s", user_id, event_id)
        return Ok(saved)

    async def unsave(self, user_id: UUID, event_id: UUID) -> Outcome:
        """Remove the relation. A missing relation is a successful no-op."""
        try:
            await self._saved_repo.delete(user_id, event_id)
        except RecordNotFoundError:
            logger.info(
                "Unsave of an event that was not saved: user_id=%s, event_id=%s",
                user_id,
                event_id,
            )
            return Ok(None)

        logger.info("Event unsaved: user_id=%s, event_id=%s", user_id, event_id)
        return Ok(None)
