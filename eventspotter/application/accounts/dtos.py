"""
Data Transfer Objects for the accounts application layer.
"""

from dataclasses import dataclass
from typing import Optional

from eventspotter.domain.accounts.entities import Principal, User


@dataclass(frozen=True)
class RegisterUserCommand:
    """Input DTO for registration. ``password`` is plaintext and never logged."""

    username: str
    email: str
    password: str


@dataclass(frozen=True)
class LoginCommand:
    """Input DTO for login.

    Attributes:
        identifier: Email address or username.
        password: Plaintext password.
    """

    identifier: str
    password: str


@dataclass(frozen=True)
class UpdateProfileCommand:
    """Input DTO for a profile update; None leaves a field unchanged."""

    principal: Principal
    username: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class ChangePasswordCommand:
    principal: Principal
    current_password: str
    new_password: str


@dataclass(frozen=True)
class AuthResult:
    """Output DTO for register and login.

    Attributes:
        user: The authenticated account.
        token: Freshly issued bearer token.
    """

    user: User
    token: str
