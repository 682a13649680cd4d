"""
Use case: List events with filters, sorting and pagination.

Input: ListEventsQuery (page, limit, category, tags, date range, sort, search)
Output: EventPage
Side effects: None (read-only query).
Failure cases: InvalidDateRangeError; data store faults propagate.
"""

import logging

from eventspotter.application.events.dtos import ListEventsQuery
from eventspotter.domain.events.entities import EventPage
from eventspotter.domain.events.query_compiler import QueryCompiler

logger = logging.getLogger(__name__)


class ListEventsUseCase:
    """Orchestrates a paginated event listing through the QueryCompiler."""

    def __init__(self, compiler: QueryCompiler) -> None:
        self._compiler = compiler

    async def execute(self, query: ListEventsQuery) -> EventPage:
        """Run the listing and return one page plus totals."""
        logger.info(
            "Listing events: page=%d, limit=%d, category=%s, tags=%s, search=%s",
            query.page,
            query.limit,
            query.category,
            query.tags,
            query.search,
        )
        return await self._compiler.execute(query)
