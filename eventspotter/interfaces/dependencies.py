"""
Shared dependency providers.

Adapters are built per request from the Database handle that the
application lifespan stores on ``app.state.database``.
"""

from fastapi import Depends, Request

from eventspotter.domain.events.ports import EventRepository, SavedEventRepository
from eventspotter.infrastructure.database import Database
from eventspotter.infrastructure.events.event_repository import EventRepositoryAdapter
from eventspotter.infrastructure.events.saved_event_repository import (
    SavedEventRepositoryAdapter,
)


def get_database(request: Request) -> Database:
    """Return the Database handle created at startup."""
    return request.app.state.database


def get_event_repository(database: Database = Depends(get_database)) -> EventRepository:
    return EventRepositoryAdapter(database)


def get_saved_event_repository(
    database: Database = Depends(get_database),
) -> SavedEventRepository:
    return SavedEventRepositoryAdapter(database)
