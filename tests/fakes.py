"""
In-memory implementations of the domain ports for tests.

The event fakes evaluate the predicate tree in Python, so listing
tests exercise the real QueryCompiler output end to end.
"""

import itertools
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

from eventspotter.domain.accounts.entities import Principal, User
from eventspotter.domain.accounts.ports import IdentityProvider, PasswordHasher, UserRepository
from eventspotter.domain.errors import (
    AuthenticationError,
    ForeignKeyViolationError,
    RecordNotFoundError,
    UniqueViolationError,
)
from eventspotter.domain.events.entities import (
    Event,
    EventChanges,
    NewEvent,
    SavedEvent,
    SortOrder,
)
from eventspotter.domain.events.ports import EventReader, EventRepository, SavedEventRepository
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

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_event(**overrides) -> Event:
    """Build an Event with sensible defaults."""
    values = dict(
        id=uuid4(),
        owner_id=uuid4(),
        title="Jazz Night",
        description="An evening of live jazz music.",
        scheduled_date=date(2025, 6, 1),
        scheduled_time=None,
        location_description="Main Hall",
        organizer_name="alice",
        category="Music",
        tags=(),
        external_url=None,
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
    )
    values.update(overrides)
    return Event(**values)


def matches(event: Event, predicate: Predicate) -> bool:
    if isinstance(predicate, Equals):
        return getattr(event, predicate.field) == predicate.value
    if isinstance(predicate, HasAny):
        return bool(set(getattr(event, predicate.field)) & set(predicate.values))
    if isinstance(predicate, OnOrAfter):
        return getattr(event, predicate.field) >= predicate.value
    if isinstance(predicate, OnOrBefore):
        return getattr(event, predicate.field) <= predicate.value
    if isinstance(predicate, ContainsText):
        return predicate.term.lower() in (getattr(event, predicate.field) or "").lower()
    if isinstance(predicate, AnyOf):
        return any(matches(event, child) for child in predicate.predicates)
    if isinstance(predicate, AllOf):
        return all(matches(event, child) for child in predicate.predicates)
    raise TypeError(predicate)


class FakeEventReader(EventReader):
    def __init__(self, events: list[Event]) -> None:
        self._events = events

    async def find(self, predicate: Predicate, sort: Sort, skip: int, take: int) -> list[Event]:
        hits = [event for event in self._events if matches(event, predicate)]
        hits.sort(key=lambda e: getattr(e, sort.field), reverse=sort.order is SortOrder.DESC)
        return hits[skip:skip + take]

    async def count(self, predicate: Predicate) -> int:
        return sum(1 for event in self._events if matches(event, predicate))


class FakeEventRepository(EventRepository):
    """Dict-backed event store. ``writes`` counts successful mutations."""

    def __init__(self, events=()) -> None:
        self.events: dict[UUID, Event] = {event.id: event for event in events}
        self.writes = 0
        self._clock = itertools.count(1)

    def add(self, event: Event) -> Event:
        self.events[event.id] = event
        return event

    @asynccontextmanager
    async def snapshot(self):
        yield FakeEventReader(list(self.events.values()))

    async def get_by_id(self, event_id: UUID) -> Optional[Event]:
        return self.events.get(event_id)

    async def exists(self, event_id: UUID) -> bool:
        return event_id in self.events

    async def get_many(self, event_ids: list[UUID]) -> list[Event]:
        return [self.events[event_id] for event_id in event_ids if event_id in self.events]

    async def count_all(self) -> int:
        return len(self.events)

    async def create(self, new_event: NewEvent) -> Event:
        now = BASE_TIME + timedelta(seconds=next(self._clock))
        event = Event(
            id=uuid4(),
            owner_id=new_event.owner_id,
            title=new_event.title,
            description=new_event.description,
            scheduled_date=new_event.scheduled_date,
            scheduled_time=new_event.scheduled_time,
            location_description=new_event.location_description,
            organizer_name=new_event.organizer_name,
            category=new_event.category,
            tags=tuple(new_event.tags),
            external_url=new_event.external_url,
            created_at=now,
            updated_at=now,
        )
        self.events[event.id] = event
        self.writes += 1
        return event

    async def update(self, event_id: UUID, changes: EventChanges) -> Event:
        current = self.events.get(event_id)
        if current is None:
            raise RecordNotFoundError("Record to update not found.")
        values = {**current.__dict__, **changes.values}
        values["updated_at"] = BASE_TIME + timedelta(seconds=next(self._clock))
        self.events[event_id] = Event(**values)
        self.writes += 1
        return self.events[event_id]

    async def delete(self, event_id: UUID) -> None:
        if self.events.pop(event_id, None) is None:
            raise RecordNotFoundError("Record to delete does not exist.")
        self.writes += 1

    async def distinct_categories(self) -> list[str]:
        return list({event.category for event in self.events.values()})

    async def tag_lists(self) -> list[tuple[str, ...]]:
        return [event.tags for event in self.events.values() if event.tags]

    async def get_at_offset(self, offset: int) -> Optional[Event]:
        ordered = sorted(self.events.values(), key=lambda e: str(e.id))
        return ordered[offset] if 0 <= offset < len(ordered) else None


class FakeSavedEventRepository(SavedEventRepository):
    """Saved relations keyed by (user_id, event_id), like the composite key."""

    def __init__(self, event_repo: FakeEventRepository) -> None:
        self._event_repo = event_repo
        self.saved: dict[tuple[UUID, UUID], SavedEvent] = {}
        self.writes = 0
        self._clock = itertools.count(1)

    async def count_all(self) -> int:
        return len(self.saved)

    async def get(self, user_id: UUID, event_id: UUID) -> Optional[SavedEvent]:
        return self.saved.get((user_id, event_id))

    async def create(self, user_id: UUID, event_id: UUID) -> SavedEvent:
        if (user_id, event_id) in self.saved:
            raise UniqueViolationError("eventspotter_user_saved_events_pkey")
        if event_id not in self._event_repo.events:
            raise ForeignKeyViolationError("eventId")
        saved = SavedEvent(
            user_id=user_id,
            event_id=event_id,
            saved_at=BASE_TIME + timedelta(seconds=next(self._clock)),
        )
        self.saved[(user_id, event_id)] = saved
        self.writes += 1
        return saved

    async def delete(self, user_id: UUID, event_id: UUID) -> None:
        if self.saved.pop((user_id, event_id), None) is None:
            raise RecordNotFoundError("Record to delete does not exist.")
        self.writes += 1

    async def list_events_for_user(self, user_id: UUID) -> list[Event]:
        mine = [saved for (owner, _), saved in self.saved.items() if owner == user_id]
        mine.sort(key=lambda saved: saved.saved_at, reverse=True)
        return [
            self._event_repo.events[saved.event_id]
            for saved in mine
            if saved.event_id in self._event_repo.events
        ]


class FakeUserRepository(UserRepository):
    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}

    def add(self, username: str, email: str, password_hash: str) -> User:
        user = User(
            id=uuid4(),
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=BASE_TIME,
            updated_at=BASE_TIME,
        )
        self.users[user.id] = user
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self.users.get(user_id)

    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        for user in self.users.values():
            if identifier in (user.email, user.username):
                return user
        return None

    async def find_conflicting(self, username, email, exclude_id=None) -> Optional[User]:
        for user in self.users.values():
            if user.id == exclude_id:
                continue
            if (username is not None and user.username == username) or (
                email is not None and user.email == email
            ):
                return user
        return None

    async def create(self, username: str, email: str, password_hash: str) -> User:
        if await self.find_conflicting(username, email):
            raise UniqueViolationError("eventspotter_users_username_key")
        return self.add(username, email, password_hash)

    async def update_profile(self, user_id, username, email) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise RecordNotFoundError("Record to update not found.")
        values = dict(user.__dict__)
        if username is not None:
            values["username"] = username
        if email is not None:
            values["email"] = email
        self.users[user_id] = User(**values)
        return self.users[user_id]

    async def update_password(self, user_id: UUID, password_hash: str) -> None:
        user = self.users[user_id]
        self.users[user_id] = User(**{**user.__dict__, "password_hash": password_hash})


class FakePasswordHasher(PasswordHasher):
    """Reversible stand-in for bcrypt; keeps tests fast."""

    async def hash(self, password: str) -> str:
        return f"hashed:{password}"

    async def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed:{password}"


class FakeIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self.tokens: dict[str, Principal] = {}
        self._counter = itertools.count(1)

    def grant(self, user: User) -> str:
        token = f"token-{next(self._counter)}"
        self.tokens[token] = user.to_principal()
        return token

    async def issue(self, user: User) -> str:
        return self.grant(user)

    async def verify(self, token: str) -> Principal:
        principal = self.tokens.get(token)
        if principal is None:
            raise AuthenticationError()
        return principal

    async def revoke(self, token: str) -> None:
        self.tokens.pop(token, None)
