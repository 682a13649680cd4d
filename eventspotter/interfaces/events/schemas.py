"""
Pydantic schemas for events API request/response validation.

These schemas enforce input validation and define the API contract.
Wire names are camelCase; attribute names stay snake_case.
No business logic belongs here.
"""

import re
from datetime import date, datetime, time
from typing import Annotated, Any, Optional
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from eventspotter.domain.events.entities import SortField, SortOrder
from eventspotter.domain.events.query_compiler import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)

TITLE_MIN_LEN = 3
TITLE_MAX_LEN = 255
DESCRIPTION_MIN_LEN = 10
SHORT_TEXT_MAX_LEN = 100
TAG_MAX_LEN = 50
URL_MAX_LEN = 2048

Tag = Annotated[str, StringConstraints(max_length=TAG_MAX_LEN)]

NON_NULLABLE_FIELDS = (
    "title",
    "description",
    "scheduled_date",
    "location_description",
    "organizer_name",
    "category",
    "tags",
)


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_time(value: str) -> str:
    if not TIME_PATTERN.match(value):
        raise ValueError("Invalid time format. Expected HH:MM or HH:MM:SS")
    return value


def _check_url(value: str) -> str:
    if not URL_PATTERN.match(value):
        raise ValueError("Invalid URL format for website")
    return value


TimeOfDay = Annotated[str, AfterValidator(_check_time)]
WebsiteUrl = Annotated[
    str, StringConstraints(max_length=URL_MAX_LEN), AfterValidator(_check_url)
]


def parse_time(value: Optional[str]) -> Optional[time]:
    """Convert a validated HH:MM[:SS] string into a time."""
    return time.fromisoformat(value) if value is not None else None


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class ListEventsRequest(CamelModel):
    """Query parameters of the event listing.

    Attributes:
        page: 1-based page number.
        limit: Page size (1-100).
        category: Exact category to filter by.
        tags: Comma-separated tags; events matching any are returned.
        start_date: Earliest scheduled date (inclusive).
        end_date: Latest scheduled date (inclusive).
        sort_by: Sort key.
        sort_order: asc or desc.
        search: Case-insensitive text searched across the text fields.
    """

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    category: Optional[str] = None
    tags: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort_by: Optional[SortField] = None
    sort_order: Optional[SortOrder] = None
    search: Optional[str] = None

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, value: Optional[date], info: ValidationInfo) -> Optional[date]:
        start = info.data.get("start_date")
        if value is not None and start is not None and value < start:
            raise ValueError("endDate cannot be before startDate")
        return value


class CreateEventRequest(CamelModel):
    """Body of POST /events."""

    title: str = Field(..., min_length=TITLE_MIN_LEN, max_length=TITLE_MAX_LEN)
    description: str = Field(..., min_length=DESCRIPTION_MIN_LEN)
    scheduled_date: date
    scheduled_time: Optional[TimeOfDay] = None
    location_description: str = Field(..., min_length=1)
    organizer_name: Optional[str] = Field(
        default=None, min_length=1, max_length=SHORT_TEXT_MAX_LEN
    )
    category: str = Field(..., min_length=1, max_length=SHORT_TEXT_MAX_LEN)
    tags: list[Tag] = Field(default_factory=list)
    external_url: Optional[WebsiteUrl] = None


class UpdateEventRequest(CamelModel):
    """Body of PATCH /events/{eventId}. Only provided fields change."""

    title: Optional[str] = Field(default=None, min_length=TITLE_MIN_LEN, max_length=TITLE_MAX_LEN)
    description: Optional[str] = Field(default=None, min_length=DESCRIPTION_MIN_LEN)
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[TimeOfDay] = None
    location_description: Optional[str] = Field(default=None, min_length=1)
    organizer_name: Optional[str] = Field(
        default=None, min_length=1, max_length=SHORT_TEXT_MAX_LEN
    )
    category: Optional[str] = Field(default=None, min_length=1, max_length=SHORT_TEXT_MAX_LEN)
    tags: Optional[list[Tag]] = None
    external_url: Optional[WebsiteUrl] = None

    @field_validator(*NON_NULLABLE_FIELDS)
    @classmethod
    def not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @model_validator(mode="after")
    def at_least_one_field(self) -> "UpdateEventRequest":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self

    def changes(self) -> dict[str, Any]:
        """Return the provided fields keyed by attribute name, in domain types."""
        values = self.model_dump(exclude_unset=True)
        if "scheduled_time" in values:
            values["scheduled_time"] = parse_time(values["scheduled_time"])
        if "tags" in values:
            values["tags"] = tuple(values["tags"])
        return values


class BatchGetEventsRequest(BaseModel):
    """Body of POST /events/batch-get."""

    ids: list[UUID]

    @field_validator("ids")
    @classmethod
    def not_empty(cls, value: list[UUID]) -> list[UUID]:
        if not value:
            raise ValueError("At least one event ID must be provided")
        return value


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class EventResponse(CamelModel):
    """A single event as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    title: str
    description: str
    scheduled_date: date
    scheduled_time: Optional[time] = None
    location_description: str
    organizer_name: str
    category: str
    tags: list[str]
    external_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class EventListResponse(CamelModel):
    """One page of events plus pagination totals."""

    events: list[EventResponse]
    total_events: int
    total_pages: int
    current_page: int
    limit: int


class EventsResponse(BaseModel):
    events: list[EventResponse]


class CategoriesResponse(BaseModel):
    categories: list[str]


class TagsResponse(BaseModel):
    tags: list[str]


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    message: str
    errors: Optional[dict[str, list[str]]] = None
