"""
Adapter: Opaque bearer tokens backed by the eventspotter_sessions table.

Tokens are random URL-safe strings. Only their SHA-256 digest is
persisted, so a leaked table cannot be replayed.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select

from eventspotter.domain.accounts.entities import Principal, User
from eventspotter.domain.accounts.ports import IdentityProvider
from eventspotter.domain.errors import AuthenticationError
from eventspotter.infrastructure.database import Database
from eventspotter.infrastructure.models import SessionRecord, UserRecord

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionIdentityProvider(IdentityProvider):
    """Issues, verifies and revokes session tokens.

    Attributes:
        session_duration_hours: Lifetime of a newly issued token.
    """

    def __init__(self, database: Database, session_duration_hours: int = 24) -> None:
        self._db = database
        self.session_duration_hours = session_duration_hours

    async def issue(self, user: User) -> str:
        token = secrets.token_urlsafe(TOKEN_BYTES)
        expires_at = datetime.now(timezone.utc) + timedelta(hours=self.session_duration_hours)
        async with self._db.session() as session:
            session.add(
                SessionRecord(token_hash=hash_token(token), user_id=user.id, expires_at=expires_at)
            )
        logger.debug("Session issued: user_id=%s, expires_at=%s", user.id, expires_at.isoformat())
        return token

    async def verify(self, token: str) -> Principal:
        now = datetime.now(timezone.utc)
        async with self._db.session() as session:
            stmt = (
                select(UserRecord.id, UserRecord.username, SessionRecord.expires_at)
                .join(SessionRecord, SessionRecord.user_id == UserRecord.id)
                .where(SessionRecord.token_hash == hash_token(token))
            )
            row = (await session.execute(stmt)).one_or_none()

        if row is None:
            raise AuthenticationError()
        if row.expires_at <= now:
            logger.info("Expired session presented: user_id=%s", row.id)
            raise AuthenticationError()
        return Principal(id=row.id, display_name=row.username)

    async def revoke(self, token: str) -> None:
        async with self._db.session() as session:
            await session.execute(
                delete(SessionRecord).where(SessionRecord.token_hash == hash_token(token))
            )

