"""
Domain service: Event query compilation and execution.

Turns optional filter, sort and pagination parameters into a QueryPlan
(a flat conjunction of predicates plus a single sort key and a window)
and runs it against the event store as one consistent read.

Filters:
    - category: exact match
    - tags: comma-separated, match-any
    - startDate / endDate: inclusive bounds on scheduled_date
    - search: case-insensitive substring across the text fields
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from eventspotter.domain.errors import InvalidDateRangeError
from eventspotter.domain.events.entities import EventPage, SortField, SortOrder
from eventspotter.domain.events.ports import EventRepository
from eventspotter.domain.events.predicates import (
    AllOf,
    AnyOf,
    ContainsText,
    Equals,
    HasAny,
    OnOrAfter,
    OnOrBefore,
    Predicate,
    Sort,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

SEARCHABLE_FIELDS = (
    "title",
    "description",
    "location_description",
    "organizer_name",
    "category",
)

SORT_ATTRIBUTES = {
    SortField.SCHEDULED_DATE: "scheduled_date",
    SortField.TITLE: "title",
    SortField.CREATED_AT: "created_at",
    SortField.ORGANIZER_NAME: "organizer_name",
    SortField.CATEGORY: "category",
}

DEFAULT_SORT = Sort(field="created_at", order=SortOrder.DESC)


@dataclass(frozen=True)
class EventQuery:
    """Typed listing query, produced by request validation.

    Attributes:
        page: 1-based page number.
        limit: Page size, 1-100.
        category: Exact category to match.
        tags: Raw comma-separated tag list, e.g. "music, outdoor".
        start_date: Earliest scheduled date (inclusive).
        end_date: Latest scheduled date (inclusive).
        sort_by: Sort key; None means created_at.
        sort_order: Sort direction; None means desc.
        search: Free-text term.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    category: Optional[str] = None
    tags: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort_by: Optional[SortField] = None
    sort_order: Optional[SortOrder] = None
    search: Optional[str] = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if not 1 <= self.limit <= MAX_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_LIMIT}, got {self.limit}")


@dataclass(frozen=True)
class QueryPlan:
    """Compiled query: what to match, how to order, which window to fetch."""

    predicate: AllOf
    sort: Sort
    skip: int
    take: int
    page: int


def parse_tags(raw: Optional[str]) -> tuple[str, ...]:
    """Split a comma-separated tag string, trimming parts and dropping empties."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def total_pages(total_count: int, limit: int) -> int:
    """Return ceil(total_count / limit); 0 when nothing matched."""
    return math.ceil(total_count / limit) if total_count else 0


class QueryCompiler:
    """Compiles and executes event listing queries.

    The store handle is injected; the compiler owns no connection state.
    """

    def __init__(self, event_repo: EventRepository) -> None:
        self._event_repo = event_repo

    def compile(self, query: EventQuery) -> QueryPlan:
        """Build the predicate tree, sort and pagination window for ``query``.

        Absent filters contribute no predicate at all.

        Raises:
            InvalidDateRangeError: If both dates are given and end < start.
        """
        if query.start_date and query.end_date and query.end_date < query.start_date:
            raise InvalidDateRangeError()

        predicates: list[Predicate] = []

        if query.category:
            predicates.append(Equals("category", query.category))

        tags = parse_tags(query.tags)
        if tags:
            predicates.append(HasAny("tags", tags))

        if query.start_date:
            predicates.append(OnOrAfter("scheduled_date", query.start_date))
        if query.end_date:
            predicates.append(OnOrBefore("scheduled_date", query.end_date))

        if query.search:
            predicates.append(
                AnyOf(tuple(ContainsText(name, query.search) for name in SEARCHABLE_FIELDS))
            )

        return QueryPlan(
            predicate=AllOf(tuple(predicates)),
            sort=self._compile_sort(query),
            skip=(query.page - 1) * query.limit,
            take=query.limit,
            page=query.page,
        )

    async def execute(self, query: EventQuery) -> EventPage:
        """Compile ``query`` and fetch the page and total from one snapshot."""
        plan = self.compile(query)
        logger.debug(
            "Executing event query: predicates=%d, sort=%s %s, skip=%d, take=%d",
            len(plan.predicate.predicates),
            plan.sort.field,
            plan.sort.order.value,
            plan.skip,
            plan.take,
        )

        async with self._event_repo.snapshot() as reader:
            items = await reader.find(plan.predicate, plan.sort, plan.skip, plan.take)
            total_count = await reader.count(plan.predicate)

        return EventPage(
            items=items,
            total_count=total_count,
            total_pages=total_pages(total_count, query.limit),
            current_page=query.page,
            limit=query.limit,
        )

    @staticmethod
    def _compile_sort(query: EventQuery) -> Sort:
        if query.sort_by is None and query.sort_order is None:
            return DEFAULT_SORT
        field = SORT_ATTRIBUTES[query.sort_by or SortField.CREATED_AT]
        return Sort(field=field, order=query.sort_order or SortOrder.DESC)
