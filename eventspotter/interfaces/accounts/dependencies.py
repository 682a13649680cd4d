"""
Dependency injection for the accounts bounded context.

Provides the identity adapters, the bearer-token principal resolver
and the account use cases.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from eventspotter.application.accounts.change_password import ChangePasswordUseCase
from eventspotter.application.accounts.get_current_user import GetCurrentUserUseCase
from eventspotter.application.accounts.list_saved_events import ListSavedEventsUseCase
from eventspotter.application.accounts.login_user import LoginUserUseCase
from eventspotter.application.accounts.logout_user import LogoutUserUseCase
from eventspotter.application.accounts.register_user import RegisterUserUseCase
from eventspotter.application.accounts.update_profile import UpdateProfileUseCase
from eventspotter.core.config import settings
from eventspotter.domain.accounts.entities import Principal
from eventspotter.domain.accounts.ports import IdentityProvider, PasswordHasher, UserRepository
from eventspotter.domain.errors import AuthenticationError
from eventspotter.domain.events.ports import SavedEventRepository
from eventspotter.infrastructure.accounts.bcrypt_hasher import BcryptPasswordHasher
from eventspotter.infrastructure.accounts.session_identity_provider import (
    SessionIdentityProvider,
)
from eventspotter.infrastructure.accounts.user_repository import UserRepositoryAdapter
from eventspotter.infrastructure.database import Database
from eventspotter.interfaces.dependencies import get_database, get_saved_event_repository

bearer_scheme = HTTPBearer(auto_error=False)


def get_user_repository(database: Database = Depends(get_database)) -> UserRepository:
    return UserRepositoryAdapter(database)


def get_identity_provider(database: Database = Depends(get_database)) -> IdentityProvider:
    return SessionIdentityProvider(
        database, session_duration_hours=settings.session_duration_hours
    )


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Return the raw bearer token of the request.

    Raises:
        AuthenticationError: No ``Authorization: Bearer`` header was sent.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return credentials.credentials


async def get_current_principal(
    request: Request,
    token: str = Depends(get_bearer_token),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> Principal:
    """Resolve the bearer token into the acting principal.

    The principal is also stored on ``request.state`` for error logging.
    """
    principal = await identity.verify(token)
    request.state.principal = principal
    return principal


def get_register_user_use_case(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> RegisterUserUseCase:
    return RegisterUserUseCase(user_repo=users, hasher=hasher, identity=identity)


def get_login_user_use_case(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> LoginUserUseCase:
    return LoginUserUseCase(user_repo=users, hasher=hasher, identity=identity)


def get_logout_user_use_case(
    identity: IdentityProvider = Depends(get_identity_provider),
) -> LogoutUserUseCase:
    return LogoutUserUseCase(identity=identity)


def get_current_user_use_case(
    users: UserRepository = Depends(get_user_repository),
) -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(user_repo=users)


def get_update_profile_use_case(
    users: UserRepository = Depends(get_user_repository),
) -> UpdateProfileUseCase:
    return UpdateProfileUseCase(user_repo=users)


def get_change_password_use_case(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> ChangePasswordUseCase:
    return ChangePasswordUseCase(user_repo=users, hasher=hasher)


def get_list_saved_events_use_case(
    saved: SavedEventRepository = Depends(get_saved_event_repository),
) -> ListSavedEventsUseCase:
    return ListSavedEventsUseCase(saved_repo=saved)
