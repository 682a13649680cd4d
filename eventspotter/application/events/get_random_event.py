"""
Use case: Pick one event at random.

Output: Ok(Event), or NotFound when there are no events.
Side effects: None.
"""

import random

from eventspotter.domain.events.outcomes import NotFound, Ok, Outcome
from eventspotter.domain.events.ports import EventRepository


class GetRandomEventUseCase:
    """Chooses a uniformly random offset and fetches the event there."""

    def __init__(self, event_repo: EventRepository, rng: random.Random | None = None) -> None:
        self._event_repo = event_repo
        self._rng = rng or random.Random()

    async def execute(self) -> Outcome:
        total = await self._event_repo.count_all()
        if total == 0:
            return NotFound(message="No events found.")

        event = await self._event_repo.get_at_offset(self._rng.randrange(total))
        if event is None:
            # Rows were deleted between count and fetch.
            event = await self._event_repo.get_at_offset(0)
        if event is None:
            return NotFound(message="No events found.")
        return Ok(event)
