"""
Use case: Remove a saved event for the acting principal.

Input: UnsaveEventCommand
Output: Ok(None), always; a missing relation is a no-op.
"""

from eventspotter.application.events.dtos import UnsaveEventCommand
from eventspotter.domain.events.outcomes import Outcome
from eventspotter.domain.events.relations import RelationMutator


class UnsaveEventUseCase:
    """Delegates to the RelationMutator."""

    def __init__(self, mutator: RelationMutator) -> None:
        self._mutator = mutator

    async def execute(self, command: UnsaveEventCommand) -> Outcome:
        return await self._mutator.unsave(command.principal.id, command.event_id)
