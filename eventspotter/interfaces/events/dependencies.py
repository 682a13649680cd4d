"""
Dependency injection for the events bounded context.

Wires infrastructure adapters into domain services and use cases via
constructor injection. This is the composition root for the events
context.
"""

from fastapi import Depends

from eventspotter.application.events.batch_get_events import BatchGetEventsUseCase
from eventspotter.application.events.create_event import CreateEventUseCase
from eventspotter.application.events.delete_event import DeleteEventUseCase
from eventspotter.application.events.get_categories import GetCategoriesUseCase
from eventspotter.application.events.get_event import GetEventUseCase
from eventspotter.application.events.get_random_event import GetRandomEventUseCase
from eventspotter.application.events.get_tags import GetTagsUseCase
from eventspotter.application.events.list_events import ListEventsUseCase
from eventspotter.application.events.save_event import SaveEventUseCase
from eventspotter.application.events.unsave_event import UnsaveEventUseCase
from eventspotter.application.events.update_event import UpdateEventUseCase
from eventspotter.core.config import settings
from eventspotter.domain.events.authorization import AuthorizationGuard
from eventspotter.domain.events.ports import EventRepository, SavedEventRepository
from eventspotter.domain.events.query_compiler import QueryCompiler
from eventspotter.domain.events.relations import RelationMutator
from eventspotter.interfaces.dependencies import get_event_repository, get_saved_event_repository


def get_authorization_guard(
    events: EventRepository = Depends(get_event_repository),
) -> AuthorizationGuard:
    return AuthorizationGuard(event_repo=events)


def get_relation_mutator(
    events: EventRepository = Depends(get_event_repository),
    saved: SavedEventRepository = Depends(get_saved_event_repository),
) -> RelationMutator:
    return RelationMutator(
        event_repo=events, saved_repo=saved, capacity=settings.max_saved_events
    )


def get_list_events_use_case(
    events: EventRepository = Depends(get_event_repository),
) -> ListEventsUseCase:
    """Build ListEventsUseCase with its QueryCompiler."""
    return ListEventsUseCase(compiler=QueryCompiler(event_repo=events))


def get_get_event_use_case(
    events: EventRepository = Depends(get_event_repository),
) -> GetEventUseCase:
    return GetEventUseCase(event_repo=events)


def get_create_event_use_case(
    events: EventRepository = Depends(get_event_repository),
) -> CreateEventUseCase:
    """Build CreateEventUseCase with the configured event cap."""
    return CreateEventUseCase(event_repo=events, capacity=settings.max_events)


def get_update_event_use_case(
    events: EventRepository = Depends(get_event_repository),
    guard: AuthorizationGuard = Depends(get_authorization_guard),
) -> UpdateEventUseCase:
    return UpdateEventUseCase(event_repo=events, guard=guard)


def get_delete_event_use_case(
    events: EventRepository = Depends(get_event_repository),
    guard: AuthorizationGuard = Depends(get_authorization_guard),
) -> DeleteEventUseCase:
    return DeleteEventUseCase(event_repo=events, guard=guard)


def get_save_event_use_case(
    mutator: RelationMutator = Depends(get_relation_mutator),
) -> SaveEventUseCase:
    return SaveEventUseCase(mutator=mutator)


def get_unsave_event_use_case(
    mutator: RelationMutator = Depends(get_relation_mutator),
) -> UnsaveEventUseCase:
    return UnsaveEventUseCase(mutator=mutator)


def get_categories_use_case(
    events: EventRepository = Depends(get_event_repository),
) -> GetCategoriesUseCase:
    return GetCategoriesUseCase(event_repo=events)


def get_tags_use_case(
    events: EventRepository = Depends(get_event_repository),
) -> GetTagsUseCase:
    return GetTagsUseCase(event_repo=events)


def get_batch_get_events_use_case(
    events: EventRepository = Depends(get_event_repository),
) -> BatchGetEventsUseCase:
    return BatchGetEventsUseCase(event_repo=events)


def get_random_event_use_case(
    events: EventRepository = Depends(get_event_repository),
) -> GetRandomEventUseCase:
    return GetRandomEventUseCase(event_repo=events)
