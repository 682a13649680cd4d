"""
Use case: Register a new account and sign it in.

Input: RegisterUserCommand
Output: AuthResult (user + bearer token)
Side effects: Inserts one user row and one session row.
Failure cases: ConflictError if the username or email is taken.
"""

import logging

from eventspotter.application.accounts.dtos import AuthResult, RegisterUserCommand
from eventspotter.domain.accounts.ports import IdentityProvider, PasswordHasher, UserRepository
from eventspotter.domain.errors import ConflictError, UniqueViolationError

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "User with this username or email already exists"


class RegisterUserUseCase:
    """Creates an account with a hashed password."""

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        identity: IdentityProvider,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._identity = identity

    async def execute(self, command: RegisterUserCommand) -> AuthResult:
        """Run the register use case.

        Raises:
            ConflictError: Username or email already registered.
        """
        if await self._user_repo.find_conflicting(command.username, command.email):
            raise ConflictError(DUPLICATE_USER_MESSAGE)

        password_hash = await self._hasher.hash(command.password)
        try:
            user = await self._user_repo.create(command.username, command.email, password_hash)
        except UniqueViolationError as exc:
            # Lost a race with a concurrent registration.
            raise ConflictError(DUPLICATE_USER_MESSAGE) from exc

        token = await self._identity.issue(user)
        logger.info("User registered: user_id=%s, username=%s", user.id, user.username)
        return AuthResult(user=user, token=token)
