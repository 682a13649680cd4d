"""
Use case: Fetch a single event by ID.

Input: GetEventQuery (event_id)
Output: Ok(Event) or NotFound
Side effects: None.
"""

from eventspotter.application.events.dtos import GetEventQuery
from eventspotter.domain.events.outcomes import NotFound, Ok, Outcome
from eventspotter.domain.events.ports import EventRepository


class GetEventUseCase:
    """Looks up one event."""

    def __init__(self, event_repo: EventRepository) -> None:
        self._event_repo = event_repo

    async def execute(self, query: GetEventQuery) -> Outcome:
        event = await self._event_repo.get_by_id(query.event_id)
        if event is None:
            return NotFound()
        return Ok(event)
