"""
Use case: Load the account behind the current principal.

Failure cases: NotFoundError if the account was removed after the
token was issued.
"""

from eventspotter.domain.accounts.entities import Principal, User
from eventspotter.domain.accounts.ports import UserRepository
from eventspotter.domain.errors import NotFoundError


class GetCurrentUserUseCase:
    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def execute(self, principal: Principal) -> User:
        user = await self._user_repo.get_by_id(principal.id)
        if user is None:
            raise NotFoundError("User not found.")
        return user
