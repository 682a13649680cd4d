"""
Adapter: Event persistence on PostgreSQL via async SQLAlchemy.

Implements the EventRepository and EventReader ports.
Translates the domain predicate tree into SQL expressions.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from uuid import UUID

from sqlalchemy import and_, delete, false, func, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from eventspotter.domain.errors import RecordNotFoundError
from eventspotter.domain.events.entities import (
    Event,
    EventChanges,
    NewEvent,
    SortOrder,
)
from eventspotter.domain.events.ports import EventReader, EventRepository
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
from eventspotter.infrastructure.database import Database
from eventspotter.infrastructure.models import EventRecord

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------

def record_to_event(record: EventRecord) -> Event:
    """Convert an ORM EventRecord to a domain Event."""
    return Event(
        id=record.id,
        owner_id=record.owner_id,
        title=record.title,
        description=record.description,
        scheduled_date=record.scheduled_date,
        scheduled_time=record.scheduled_time,
        location_description=record.location_description,
        organizer_name=record.organizer_name,
        category=record.category,
        tags=tuple(record.tags or ()),
        external_url=record.external_url,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _new_event_to_record(new_event: NewEvent) -> EventRecord:
    return EventRecord(
        owner_id=new_event.owner_id,
        title=new_event.title,
        description=new_event.description,
        scheduled_date=new_event.scheduled_date,
        scheduled_time=new_event.scheduled_time,
        location_description=new_event.location_description,
        organizer_name=new_event.organizer_name,
        category=new_event.category,
        tags=list(new_event.tags),
        external_url=new_event.external_url,
    )


# ---------------------------------------------------------------------------
# Predicate translation
# ---------------------------------------------------------------------------

def _column(field: str):
    column = getattr(EventRecord, field, None)
    if column is None:
        raise ValueError(f"Unknown event field: {field}")
    return column


def _escape_like(term: str) -> str:
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def to_sql(predicate: Predicate) -> ColumnElement[bool]:
    """Translate a predicate tree node into a SQLAlchemy boolean expression."""
    if isinstance(predicate, Equals):
        return _column(predicate.field) == predicate.value
    if isinstance(predicate, HasAny):
        return _column(predicate.field).overlap(list(predicate.values))
    if isinstance(predicate, OnOrAfter):
        return _column(predicate.field) >= predicate.value
    if isinstance(predicate, OnOrBefore):
        return _column(predicate.field) <= predicate.value
    if isinstance(predicate, ContainsText):
        pattern = f"%{_escape_like(predicate.term)}%"
        return _column(predicate.field).ilike(pattern, escape=LIKE_ESCAPE)
    if isinstance(predicate, AnyOf):
        if not predicate.predicates:
            return false()
        return or_(*(to_sql(child) for child in predicate.predicates))
    if isinstance(predicate, AllOf):
        if predicate.is_empty():
            return true()
        return and_(*(to_sql(child) for child in predicate.predicates))
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def _order_by(sort: Sort):
    column = _column(sort.field)
    return column.asc() if sort.order is SortOrder.ASC else column.desc()


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

class SqlEventReader(EventReader):
    """Reads events through one session bound to a snapshot transaction."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find(self, predicate: Predicate, sort: Sort, skip: int, take: int) -> list[Event]:
        stmt = (
            select(EventRecord)
            .where(to_sql(predicate))
            .order_by(_order_by(sort))
            .offset(skip)
            .limit(take)
        )
        result = await self._session.execute(stmt)
        return [record_to_event(record) for record in result.scalars()]

    async def count(self, predicate: Predicate) -> int:
        stmt = select(func.count()).select_from(EventRecord).where(to_sql(predicate))
        return (await self._session.execute(stmt)).scalar_one()


class EventRepositoryAdapter(EventRepository):
    """Concrete adapter for event persistence.

    Implements the EventRepository port defined in the domain layer.
    Every method opens its own short-lived session.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[EventReader]:
        async with self._db.snapshot() as session:
            yield SqlEventReader(session)

    async def get_by_id(self, event_id: UUID) -> Optional[Event]:
        async with self._db.session() as session:
            record = await session.get(EventRecord, event_id)
            return record_to_event(record) if record else None

    async def exists(self, event_id: UUID) -> bool:
        async with self._db.session() as session:
            stmt = select(EventRecord.id).where(EventRecord.id == event_id).limit(1)
            return (await session.execute(stmt)).scalar_one_or_none() is not None

    async def get_many(self, event_ids: list[UUID]) -> list[Event]:
        if not event_ids:
            return []
        async with self._db.session() as session:
            result = await session.execute(select(EventRecord).where(EventRecord.id.in_(event_ids)))
            return [record_to_event(record) for record in result.scalars()]

    async def count_all(self) -> int:
        async with self._db.session() as session:
            return (await session.execute(select(func.count()).select_from(EventRecord))).scalar_one()

    async def create(self, new_event: NewEvent) -> Event:
        async with self._db.session() as session:
            record = _new_event_to_record(new_event)
            session.add(record)
            await session.flush()
            return record_to_event(record)

    async def update(self, event_id: UUID, changes: EventChanges) -> Event:
        async with self._db.session() as session:
            record = await session.get(EventRecord, event_id)
            if record is None:
                raise RecordNotFoundError("Record to update not found.")
            for name, value in changes.values.items():
                setattr(record, name, list(value) if name == "tags" else value)
            await session.flush()
            await session.refresh(record)
            logger.debug("Event row updated: event_id=%s, fields=%s", event_id, changes.fields)
            return record_to_event(record)

    async def delete(self, event_id: UUID) -> None:
        async with self._db.session() as session:
            result = await session.execute(delete(EventRecord).where(EventRecord.id == event_id))
            if result.rowcount == 0:
                raise RecordNotFoundError("Record to delete does not exist.")

    async def distinct_categories(self) -> list[str]:
        async with self._db.session() as session:
            result = await session.execute(select(EventRecord.category).distinct())
            return list(result.scalars())

    async def tag_lists(self) -> list[tuple[str, ...]]:
        async with self._db.session() as session:
            stmt = select(EventRecord.tags).where(func.cardinality(EventRecord.tags) > 0)
            result = await session.execute(stmt)
            return [tuple(tags) for tags in result.scalars()]

    async def get_at_offset(self, offset: int) -> Optional[Event]:
        async with self._db.session() as session:
            stmt = select(EventRecord).order_by(EventRecord.id).offset(offset).limit(1)
            record = (await session.execute(stmt)).scalar_one_or_none()
            return record_to_event(record) if record else None
