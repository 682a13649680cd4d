"""
Adapter: Saved event (bookmark) persistence.

Implements the SavedEventRepository port. The composite primary key
on (user_id, event_id) makes a duplicate save fail with a unique
violation, which the caller treats as already saved.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, select

from eventspotter.domain.errors import RecordNotFoundError
from eventspotter.domain.events.entities import Event, SavedEvent
from eventspotter.domain.events.ports import SavedEventRepository
from eventspotter.infrastructure.database import Database
from eventspotter.infrastructure.events.event_repository import record_to_event
from eventspotter.infrastructure.models import EventRecord, SavedEventRecord


def _record_to_saved(record: SavedEventRecord) -> SavedEvent:
    return SavedEvent(user_id=record.user_id, event_id=record.event_id, saved_at=record.saved_at)


class SavedEventRepositoryAdapter(SavedEventRepository):
    """Concrete adapter for the user <-> event saved relation."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def count_all(self) -> int:
        async with self._db.session() as session:
            stmt = select(func.count()).select_from(SavedEventRecord)
            return (await session.execute(stmt)).scalar_one()

    async def get(self, user_id: UUID, event_id: UUID) -> Optional[SavedEvent]:
        async with self._db.session() as session:
            record = await session.get(SavedEventRecord, (user_id, event_id))
            return _record_to_saved(record) if record else None

    async def create(self, user_id: UUID, event_id: UUID) -> SavedEvent:
        async with self._db.session() as session:
            record = SavedEventRecord(user_id=user_id, event_id=event_id)
            session.add(record)
            await session.flush()
            return _record_to_saved(record)

    async def delete(self, user_id: UUID, event_id: UUID) -> None:
        async with self._db.session() as session:
            result = await session.execute(
                delete(SavedEventRecord).where(
                    SavedEventRecord.user_id == user_id,
                    SavedEventRecord.event_id == event_id,
                )
            )
            if result.rowcount == 0:
                raise RecordNotFoundError("Record to delete does not exist.")

    async def list_events_for_user(self, user_id: UUID) -> list[Event]:
        async with self._db.session() as session:
            stmt = (
                select(EventRecord)
                .join(SavedEventRecord, SavedEventRecord.event_id == EventRecord.id)
                .where(SavedEventRecord.user_id == user_id)
                .order_by(SavedEventRecord.saved_at.desc())
            )
            result = await session.execute(stmt)
            return [record_to_event(record) for record in result.scalars()]
