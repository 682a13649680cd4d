"""
Use case: Fetch several events by ID in one call.

Input: BatchGetEventsQuery (one or more IDs)
Output: list[Event]; IDs with no event are skipped, not reported.
"""

import logging

from eventspotter.application.events.dtos import BatchGetEventsQuery
from eventspotter.domain.events.entities import Event
from eventspotter.domain.events.ports import EventRepository

logger = logging.getLogger(__name__)


class BatchGetEventsUseCase:
    """Looks up a batch of events."""

    def __init__(self, event_repo: EventRepository) -> None:
        self._event_repo = event_repo

    async def execute(self, query: BatchGetEventsQuery) -> list[Event]:
        unique_ids = list(dict.fromkeys(query.event_ids))
        events = await self._event_repo.get_many(unique_ids)
        logger.info("Batch get: requested=%d, found=%d", len(unique_ids), len(events))
        return events
