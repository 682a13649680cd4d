"""
Use case: Authenticate with an email or username and a password.

Input: LoginCommand
Output: AuthResult
Side effects: Inserts one session row.
Failure cases: InvalidCredentialsError for an unknown identifier or a
wrong password (the two are indistinguishable to the client).
"""

import logging

from eventspotter.application.accounts.dtos import AuthResult, LoginCommand
from eventspotter.domain.accounts.ports import IdentityProvider, PasswordHasher, UserRepository
from eventspotter.domain.errors import InvalidCredentialsError

logger = logging.getLogger(__name__)


class LoginUserUseCase:
    """Verifies credentials and issues a bearer token."""

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        identity: IdentityProvider,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._identity = identity

    async def execute(self, command: LoginCommand) -> AuthResult:
        user = await self._user_repo.find_by_identifier(command.identifier)
        if user is None or not await self._hasher.verify(command.password, user.password_hash):
            logger.warning("Login failed: identifier=%s", command.identifier)
            raise InvalidCredentialsError()

        token = await self._identity.issue(user)
        logger.info("User logged in: user_id=%s", user.id)
        return AuthResult(user=user, token=token)
