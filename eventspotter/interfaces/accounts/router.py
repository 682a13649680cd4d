"""
FastAPI router for the accounts bounded context.

Registration, login and logout, plus the current account's profile,
password and saved events.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from eventspotter.application.accounts.change_password import ChangePasswordUseCase
from eventspotter.application.accounts.dtos import (
    AuthResult,
    ChangePasswordCommand,
    LoginCommand,
    RegisterUserCommand,
    UpdateProfileCommand,
)
from eventspotter.application.accounts.get_current_user import GetCurrentUserUseCase
from eventspotter.application.accounts.list_saved_events import ListSavedEventsUseCase
from eventspotter.application.accounts.login_user import LoginUserUseCase
from eventspotter.application.accounts.logout_user import LogoutUserUseCase
from eventspotter.application.accounts.register_user import RegisterUserUseCase
from eventspotter.application.accounts.update_profile import UpdateProfileUseCase
from eventspotter.domain.accounts.entities import Principal
from eventspotter.interfaces.accounts.dependencies import (
    get_bearer_token,
    get_change_password_use_case,
    get_current_principal,
    get_current_user_use_case,
    get_list_saved_events_use_case,
    get_login_user_use_case,
    get_logout_user_use_case,
    get_register_user_use_case,
    get_update_profile_use_case,
)
from eventspotter.interfaces.accounts.schemas import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from eventspotter.interfaces.events.schemas import (
    ErrorResponse,
    EventResponse,
    EventsResponse,
    MessageResponse,
)
from eventspotter.shared.security.rate_limiting import AUTH_RATE_LIMIT, limiter

router = APIRouter(prefix="/auth", tags=["auth"])

AUTH_RESPONSES = {401: {"model": ErrorResponse}}


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        id=result.user.id,
        username=result.user.username,
        email=result.user.email,
        token=result.token,
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Register a new account",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def register(
    request: Request,
    body: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
) -> AuthResponse:
    result = await use_case.execute(
        RegisterUserCommand(username=body.username, email=body.email, password=body.password)
    )
    return _auth_response(result)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, **AUTH_RESPONSES},
    summary="Log in with email or username",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
) -> AuthResponse:
    result = await use_case.execute(
        LoginCommand(identifier=body.identifier, password=body.password)
    )
    return _auth_response(result)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=AUTH_RESPONSES,
    summary="Revoke the current bearer token",
)
async def logout(
    principal: Principal = Depends(get_current_principal),
    token: str = Depends(get_bearer_token),
    use_case: LogoutUserUseCase = Depends(get_logout_user_use_case),
) -> Response:
    await use_case.execute(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={**AUTH_RESPONSES, 404: {"model": ErrorResponse}},
    summary="Get the current account",
)
async def get_me(
    principal: Principal = Depends(get_current_principal),
    use_case: GetCurrentUserUseCase = Depends(get_current_user_use_case),
) -> UserResponse:
    return UserResponse.model_validate(await use_case.execute(principal))


@router.patch(
    "/me",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}, **AUTH_RESPONSES, 409: {"model": ErrorResponse}},
    summary="Update the current account's username or email",
)
async def update_me(
    body: UpdateProfileRequest,
    principal: Principal = Depends(get_current_principal),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
) -> UserResponse:
    user = await use_case.execute(
        UpdateProfileCommand(principal=principal, username=body.username, email=body.email)
    )
    return UserResponse.model_validate(user)


@router.post(
    "/me/password",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, **AUTH_RESPONSES},
    summary="Change the current account's password",
)
async def change_password(
    body: ChangePasswordRequest,
    principal: Principal = Depends(get_current_principal),
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
) -> MessageResponse:
    await use_case.execute(
        ChangePasswordCommand(
            principal=principal,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    )
    return MessageResponse(message="Password updated successfully.")


@router.get(
    "/me/saved-events",
    response_model=EventsResponse,
    responses=AUTH_RESPONSES,
    summary="List the current account's saved events",
    description="Most recently saved first.",
)
async def list_saved_events(
    principal: Principal = Depends(get_current_principal),
    use_case: ListSavedEventsUseCase = Depends(get_list_saved_events_use_case),
) -> EventsResponse:
    events = await use_case.execute(principal)
    return EventsResponse(events=[EventResponse.model_validate(event) for event in events])
