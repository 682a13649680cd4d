"""
Port interfaces (ABCs) for the accounts bounded context.

Ports define the contracts for user storage, credential issuance
and verification, and password hashing.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from eventspotter.domain.accounts.entities import Principal, User


class UserRepository(ABC):
    """Port for user account persistence."""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Return a user by ID, or None."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        """Return the user whose email or username equals ``identifier``."""
        raise NotImplementedError

    @abstractmethod
    async def find_conflicting(
        self,
        username: Optional[str],
        email: Optional[str],
        exclude_id: Optional[UUID] = None,
    ) -> Optional[User]:
        """Return another user already holding ``username`` or ``email``."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, username: str, email: str, password_hash: str) -> User:
        """Persist a new user.

        Raises:
            UniqueViolationError: Username or email is taken.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_profile(
        self, user_id: UUID, username: Optional[str], email: Optional[str]
    ) -> User:
        """Update the given profile fields; None leaves a field unchanged.

        Raises:
            RecordNotFoundError: The user does not exist.
            UniqueViolationError: Username or email is taken.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_password(self, user_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash."""
        raise NotImplementedError


class IdentityProvider(ABC):
    """Port for issuing and verifying bearer credentials."""

    @abstractmethod
    async def issue(self, user: User) -> str:
        """Return a new opaque bearer token for ``user``."""
        raise NotImplementedError

    @abstractmethod
    async def verify(self, token: str) -> Principal:
        """Return the principal the token was issued to.

        Raises:
            AuthenticationError: The token is unknown or expired.
        """
        raise NotImplementedError

    @abstractmethod
    async def revoke(self, token: str) -> None:
        """Invalidate ``token``. Unknown tokens are ignored."""
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    async def hash(self, password: str) -> str:
        """Return a salted hash of ``password``."""
        raise NotImplementedError

    @abstractmethod
    async def verify(self, password: str, password_hash: str) -> bool:
        """Return True if ``password`` matches ``password_hash``."""
        raise NotImplementedError
