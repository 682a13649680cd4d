"""
Adapter: User account persistence.

Implements the UserRepository port on the eventspotter_users table.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import or_, select, update

from eventspotter.domain.accounts.entities import User
from eventspotter.domain.accounts.ports import UserRepository
from eventspotter.domain.errors import RecordNotFoundError
from eventspotter.infrastructure.database import Database
from eventspotter.infrastructure.models import UserRecord


def _record_to_user(record: UserRecord) -> User:
    return User(
        id=record.id,
        username=record.username,
        email=record.email,
        password_hash=record.password_hash,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class UserRepositoryAdapter(UserRepository):
    """Concrete adapter for user account persistence."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        async with self._db.session() as session:
            record = await session.get(UserRecord, user_id)
            return _record_to_user(record) if record else None

    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        async with self._db.session() as session:
            stmt = select(UserRecord).where(
                or_(UserRecord.email == identifier, UserRecord.username == identifier)
            )
            record = (await session.execute(stmt.limit(1))).scalar_one_or_none()
            return _record_to_user(record) if record else None

    async def find_conflicting(
        self,
        username: Optional[str],
        email: Optional[str],
        exclude_id: Optional[UUID] = None,
    ) -> Optional[User]:
        clauses = []
        if username is not None:
            clauses.append(UserRecord.username == username)
        if email is not None:
            clauses.append(UserRecord.email == email)
        if not clauses:
            return None

        stmt = select(UserRecord).where(or_(*clauses))
        if exclude_id is not None:
            stmt = stmt.where(UserRecord.id != exclude_id)
        async with self._db.session() as session:
            record = (await session.execute(stmt.limit(1))).scalar_one_or_none()
            return _record_to_user(record) if record else None

    async def create(self, username: str, email: str, password_hash: str) -> User:
        async with self._db.session() as session:
            record = UserRecord(username=username, email=email, password_hash=password_hash)
            session.add(record)
            await session.flush()
            return _record_to_user(record)

    async def update_profile(
        self, user_id: UUID, username: Optional[str], email: Optional[str]
    ) -> User:
        async with self._db.session() as session:
            record = await session.get(UserRecord, user_id)
            if record is None:
                raise RecordNotFoundError("Record to update not found.")
            if username is not None:
                record.username = username
            if email is not None:
                record.email = email
            await session.flush()
            await session.refresh(record)
            return _record_to_user(record)

    async def update_password(self, user_id: UUID, password_hash: str) -> None:
        async with self._db.session() as session:
            result = await session.execute(
                update(UserRecord)
                .where(UserRecord.id == user_id)
                .values(password_hash=password_hash)
            )
            if result.rowcount == 0:
                raise RecordNotFoundError("Record to update not found.")
