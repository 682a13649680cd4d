"""
Use case: Change the username and/or email of the current account.

Input: UpdateProfileCommand
Output: User
Side effects: Updates one user row.
Failure cases: ConflictError if another account holds the new value;
NotFoundError if the account no longer exists.
"""

import logging

from eventspotter.application.accounts.dtos import UpdateProfileCommand
from eventspotter.domain.accounts.entities import User
from eventspotter.domain.accounts.ports import UserRepository
from eventspotter.domain.errors import ConflictError, NotFoundError, UniqueViolationError

logger = logging.getLogger(__name__)


class UpdateProfileUseCase:
    """Applies a profile change after checking uniqueness."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def execute(self, command: UpdateProfileCommand) -> User:
        user_id = command.principal.id
        current = await self._user_repo.get_by_id(user_id)
        if current is None:
            raise NotFoundError("User not found.")

        username = command.username if command.username != current.username else None
        email = command.email if command.email != current.email else None
        if username is None and email is None:
            return current

        clash = await self._user_repo.find_conflicting(username, email, exclude_id=user_id)
        if clash is not None:
            field = "username" if username is not None and clash.username == username else "email"
            raise ConflictError(f"User with this {field} already exists.")

        try:
            user = await self._user_repo.update_profile(user_id, username, email)
        except UniqueViolationError as exc:
            raise ConflictError("User with this username or email already exists.") from exc

        logger.info(
            "Profile updated: user_id=%s, username_changed=%s, email_changed=%s",
            user_id,
            username is not None,
            email is not None,
        )
        return user
