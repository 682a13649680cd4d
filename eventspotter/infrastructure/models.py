"""
SQLAlchemy ORM models for the EventSpotter data store.

Relationships:
    UserRecord 1--* EventRecord       (user_id foreign key, cascade delete)
    UserRecord *--* EventRecord       (through SavedEventRecord, cascade delete)
    UserRecord 1--* SessionRecord     (user_id foreign key, cascade delete)

ORM attribute names match the domain entity attribute names, so
predicate field names resolve directly to columns.
"""

import uuid
from datetime import date, datetime, time, timezone
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, String, Text, Time, text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""

    pass


class UserRecord(Base):
    __tablename__ = "eventspotter_users"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


class EventRecord(Base):
    """Persisted event. Column names differ from attribute names where noted."""

    __tablename__ = "eventspotter_events"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("eventspotter_users.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    scheduled_date: Mapped[date] = mapped_column("event_date", Date, nullable=False, index=True)
    scheduled_time: Mapped[Optional[time]] = mapped_column("event_time", Time, nullable=True)
    location_description: Mapped[str] = mapped_column(Text, nullable=False)
    organizer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    tags: Mapped[list[str]] = mapped_column(
        ARRAY(Text), nullable=False, default=list, server_default=text("ARRAY[]::TEXT[]")
    )
    external_url: Mapped[Optional[str]] = mapped_column("website_url", String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


class SavedEventRecord(Base):
    """One user's bookmark of one event; the composite key forbids duplicates."""

    __tablename__ = "eventspotter_user_saved_events"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("eventspotter_users.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    event_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("eventspotter_events.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    saved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )


class SessionRecord(Base):
    """Issued bearer token. Only the SHA-256 hex digest is stored."""

    __tablename__ = "eventspotter_sessions"

    token_hash: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("eventspotter_users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
