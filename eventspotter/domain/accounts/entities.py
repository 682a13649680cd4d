"""
Domain entities for the accounts bounded context.

Entities contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Principal:
    """The authenticated actor of a request, derived from a bearer credential."""

    id: UUID
    display_name: str


@dataclass(frozen=True)
class User:
    """A registered account. ``password_hash`` never leaves the backend."""

    id: UUID
    username: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime

    def to_principal(self) -> Principal:
        return Principal(id=self.id, display_name=self.username)
