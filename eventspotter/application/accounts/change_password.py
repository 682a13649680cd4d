"""
Use case: Change the password of the current account.

Input: ChangePasswordCommand
Side effects: Replaces the stored password hash.
Failure cases: InvalidCredentialsError if the current password is wrong.
"""

import logging

from eventspotter.application.accounts.dtos import ChangePasswordCommand
from eventspotter.domain.accounts.ports import PasswordHasher, UserRepository
from eventspotter.domain.errors import InvalidCredentialsError, NotFoundError

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher) -> None:
        self._user_repo = user_repo
        self._hasher = hasher

    async def execute(self, command: ChangePasswordCommand) -> None:
        user = await self._user_repo.get_by_id(command.principal.id)
        if user is None:
            raise NotFoundError("User not found.")
        if not await self._hasher.verify(command.current_password, user.password_hash):
            raise InvalidCredentialsError("Invalid current password.")

        await self._user_repo.update_password(user.id, await self._hasher.hash(command.new_password))
        logger.info("Password changed: user_id=%s", user.id)
