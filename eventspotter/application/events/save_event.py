"""
Use case: Save (bookmark) an event for the acting principal.

Input: SaveEventCommand
Output: Ok(SaveEventResult), NotFound or CapacityExceeded
Side effects: Inserts at most one saved relation.
"""

from eventspotter.application.events.dtos import SaveEventCommand, SaveEventResult
from eventspotter.domain.events.outcomes import AlreadySaved, Ok, Outcome
from eventspotter.domain.events.relations import RelationMutator


class SaveEventUseCase:
    """Delegates to the RelationMutator and folds both success variants into one result."""

    def __init__(self, mutator: RelationMutator) -> None:
        self._mutator = mutator

    async def execute(self, command: SaveEventCommand) -> Outcome:
        outcome = await self._mutator.save(command.principal.id, command.event_id)
        if isinstance(outcome, AlreadySaved):
            return Ok(SaveEventResult(created=False, message=outcome.message))
        if isinstance(outcome, Ok):
            return Ok(SaveEventResult(created=True, message="Event saved successfully."))
        return outcome
