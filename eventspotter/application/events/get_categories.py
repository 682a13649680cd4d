"""
Use case: List the distinct event categories, sorted.

Side effects: None.
"""

from eventspotter.domain.events.ports import EventRepository


class GetCategoriesUseCase:
    """Returns every category in use, sorted ascending."""

    def __init__(self, event_repo: EventRepository) -> None:
        self._event_repo = event_repo

    async def execute(self) -> list[str]:
        return sorted(set(await self._event_repo.distinct_categories()))
