"""
FastAPI router for the events bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Failed outcomes and raised errors are mapped by the centralized
error handlers.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from fastapi.responses import JSONResponse

from eventspotter.application.events.batch_get_events import BatchGetEventsUseCase
from eventspotter.application.events.create_event import CreateEventUseCase
from eventspotter.application.events.delete_event import DeleteEventUseCase
from eventspotter.application.events.dtos import (
    BatchGetEventsQuery,
    CreateEventCommand,
    DeleteEventCommand,
    GetEventQuery,
    ListEventsQuery,
    SaveEventCommand,
    UnsaveEventCommand,
    UpdateEventCommand,
)
from eventspotter.application.events.get_categories import GetCategoriesUseCase
from eventspotter.application.events.get_event import GetEventUseCase
from eventspotter.application.events.get_random_event import GetRandomEventUseCase
from eventspotter.application.events.get_tags import GetTagsUseCase
from eventspotter.application.events.list_events import ListEventsUseCase
from eventspotter.application.events.save_event import SaveEventUseCase
from eventspotter.application.events.unsave_event import UnsaveEventUseCase
from eventspotter.application.events.update_event import UpdateEventUseCase
from eventspotter.domain.accounts.entities import Principal
from eventspotter.domain.events.outcomes import is_failure
from eventspotter.interfaces.accounts.dependencies import get_current_principal
from eventspotter.interfaces.events.dependencies import (
    get_batch_get_events_use_case,
    get_categories_use_case,
    get_create_event_use_case,
    get_delete_event_use_case,
    get_get_event_use_case,
    get_list_events_use_case,
    get_random_event_use_case,
    get_save_event_use_case,
    get_tags_use_case,
    get_unsave_event_use_case,
    get_update_event_use_case,
)
from eventspotter.interfaces.events.schemas import (
    BatchGetEventsRequest,
    CategoriesResponse,
    CreateEventRequest,
    ErrorResponse,
    EventListResponse,
    EventResponse,
    EventsResponse,
    ListEventsRequest,
    MessageResponse,
    TagsResponse,
    UpdateEventRequest,
    parse_time,
)
from eventspotter.shared.errors.handlers import error_messages, outcome_response
from eventspotter.shared.security.rate_limiting import AUTH_RATE_LIMIT, limiter

router = APIRouter(prefix="/events", tags=["events"])

EventId = Annotated[UUID, Path(description="UUID of the event")]
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]

VALIDATION_RESPONSES = {400: {"model": ErrorResponse}}
AUTH_RESPONSES = {401: {"model": ErrorResponse}}


@router.get(
    "",
    response_model=EventListResponse,
    responses=VALIDATION_RESPONSES,
    summary="List events",
    description="Filter, sort and paginate events.",
)
async def list_events(
    params: Annotated[ListEventsRequest, Query()],
    use_case: ListEventsUseCase = Depends(get_list_events_use_case),
) -> EventListResponse:
    """Return one page of events and the pagination totals."""
    page = await use_case.execute(
        ListEventsQuery(
            page=params.page,
            limit=params.limit,
            category=params.category,
            tags=params.tags,
            start_date=params.start_date,
            end_date=params.end_date,
            sort_by=params.sort_by,
            sort_order=params.sort_order,
            search=params.search,
        )
    )
    return EventListResponse(
        events=[EventResponse.model_validate(event) for event in page.items],
        total_events=page.total_count,
        total_pages=page.total_pages,
        current_page=page.current_page,
        limit=page.limit,
    )


@router.get(
    "/categories",
    response_model=CategoriesResponse,
    summary="List categories",
)
async def get_categories(
    use_case: GetCategoriesUseCase = Depends(get_categories_use_case),
) -> CategoriesResponse:
    return CategoriesResponse(categories=await use_case.execute())


@router.get(
    "/tags",
    response_model=TagsResponse,
    summary="List tags",
    description="Distinct tags, trimmed and lower-cased.",
)
async def get_tags(
    use_case: GetTagsUseCase = Depends(get_tags_use_case),
) -> TagsResponse:
    return TagsResponse(tags=await use_case.execute())


@router.get(
    "/random",
    response_model=EventResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a random event",
)
async def get_random_event(
    request: Request,
    use_case: GetRandomEventUseCase = Depends(get_random_event_use_case),
):
    outcome = await use_case.execute()
    if is_failure(outcome):
        return outcome_response(request, outcome)
    return EventResponse.model_validate(outcome.value)


@router.post(
    "/batch-get",
    response_model=EventsResponse,
    responses=VALIDATION_RESPONSES,
    summary="Get several events by ID",
    description="Unknown IDs are skipped.",
)
async def batch_get_events(
    body: BatchGetEventsRequest,
    use_case: BatchGetEventsUseCase = Depends(get_batch_get_events_use_case),
) -> EventsResponse:
    events = await use_case.execute(BatchGetEventsQuery(event_ids=tuple(body.ids)))
    return EventsResponse(events=[EventResponse.model_validate(event) for event in events])


@router.get(
    "/{event_id}",
    response_model=EventResponse,
    responses={**VALIDATION_RESPONSES, 404: {"model": ErrorResponse}},
    summary="Get an event",
)
async def get_event(
    request: Request,
    event_id: EventId,
    use_case: GetEventUseCase = Depends(get_get_event_use_case),
):
    outcome = await use_case.execute(GetEventQuery(event_id=event_id))
    if is_failure(outcome):
        return outcome_response(request, outcome)
    return EventResponse.model_validate(outcome.value)


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **VALIDATION_RESPONSES,
        **AUTH_RESPONSES,
        409: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    dependencies=[error_messages(conflict="An event with these details already exists.")],
    summary="Create an event",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def create_event(
    request: Request,
    body: CreateEventRequest,
    principal: CurrentPrincipal,
    use_case: CreateEventUseCase = Depends(get_create_event_use_case),
):
    """Create an event owned by the caller."""
    outcome = await use_case.execute(
        CreateEventCommand(
            principal=principal,
            title=body.title,
            description=body.description,
            scheduled_date=body.scheduled_date,
            scheduled_time=parse_time(body.scheduled_time),
            location_description=body.location_description,
            organizer_name=body.organizer_name,
            category=body.category,
            tags=tuple(body.tags),
            external_url=body.external_url,
        )
    )
    if is_failure(outcome):
        return outcome_response(request, outcome)
    return EventResponse.model_validate(outcome.value)


@router.patch(
    "/{event_id}",
    response_model=EventResponse,
    responses={
        **VALIDATION_RESPONSES,
        **AUTH_RESPONSES,
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    dependencies=[error_messages(not_found="Event not found.")],
    summary="Update an event",
)
async def update_event(
    request: Request,
    event_id: EventId,
    body: UpdateEventRequest,
    principal: CurrentPrincipal,
    use_case: UpdateEventUseCase = Depends(get_update_event_use_case),
):
    """Apply a partial update to an event the caller owns."""
    outcome = await use_case.execute(
        UpdateEventCommand(principal=principal, event_id=event_id, changes=body.changes())
    )
    if is_failure(outcome):
        return outcome_response(request, outcome)
    return EventResponse.model_validate(outcome.value)


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**AUTH_RESPONSES, 403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    dependencies=[error_messages(not_found="Event not found.")],
    summary="Delete an event",
)
async def delete_event(
    request: Request,
    event_id: EventId,
    principal: CurrentPrincipal,
    use_case: DeleteEventUseCase = Depends(get_delete_event_use_case),
) -> Response:
    outcome = await use_case.execute(DeleteEventCommand(principal=principal, event_id=event_id))
    if is_failure(outcome):
        return outcome_response(request, outcome)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{event_id}/save",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": MessageResponse, "description": "Event was already saved"},
        **AUTH_RESPONSES,
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Save an event",
)
async def save_event(
    request: Request,
    event_id: EventId,
    principal: CurrentPrincipal,
    use_case: SaveEventUseCase = Depends(get_save_event_use_case),
):
    """Bookmark an event. Saving twice is not an error."""
    outcome = await use_case.execute(SaveEventCommand(principal=principal, event_id=event_id))
    if is_failure(outcome):
        return outcome_response(request, outcome)
    result = outcome.value
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK,
        content=MessageResponse(message=result.message).model_dump(),
    )


@router.delete(
    "/{event_id}/save",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=AUTH_RESPONSES,
    summary="Unsave an event",
    description="Idempotent: removing a bookmark that does not exist succeeds.",
)
async def unsave_event(
    event_id: EventId,
    principal: CurrentPrincipal,
    use_case: UnsaveEventUseCase = Depends(get_unsave_event_use_case),
) -> Response:
    await use_case.execute(UnsaveEventCommand(principal=principal, event_id=event_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
