"""
Use case: List the events the current account has saved, newest save first.
"""

from eventspotter.domain.accounts.entities import Principal
from eventspotter.domain.events.entities import Event
from eventspotter.domain.events.ports import SavedEventRepository


class ListSavedEventsUseCase:
    def __init__(self, saved_repo: SavedEventRepository) -> None:
        self._saved_repo = saved_repo

    async def execute(self, principal: Principal) -> list[Event]:
        return await self._saved_repo.list_events_for_user(principal.id)
