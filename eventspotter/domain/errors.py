"""
Domain-specific errors shared by the events and accounts contexts.

All errors raised from the domain and application layers are defined here.
They are classified into HTTP responses at the shared error layer.
No framework imports allowed.

Two families live here:
- EventSpotterError: expected, client-facing failures.
- PersistenceError: failures reported by the data store adapters
  (constraint violations, missing rows on mutation).
"""

from typing import Optional


class EventSpotterError(Exception):
    """Base error for all client-facing domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class AuthenticationError(EventSpotterError):
    """Raised when a bearer credential is missing, invalid or expired."""

    def __init__(self, message: str = "Authentication required: Invalid or missing token") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when a login or password check fails."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class AuthorizationError(EventSpotterError):
    """Raised when the principal may not act on a resource."""


class NotFoundError(EventSpotterError):
    """Raised when a requested resource does not exist."""


class ConflictError(EventSpotterError):
    """Raised when a write would duplicate a unique value."""


class CapacityExceededError(EventSpotterError):
    """Raised when an admission-controlled table is at its cap."""

    def __init__(self, message: str, limit: int) -> None:
        super().__init__(message)
        self.limit = limit


class InvalidDateRangeError(EventSpotterError):
    """Raised when an end date precedes its start date."""

    def __init__(self) -> None:
        super().__init__("endDate cannot be before startDate")
        self.field = "endDate"


class PersistenceError(Exception):
    """Base error for data store failures surfaced by adapters."""


class UniqueViolationError(PersistenceError):
    """A write hit a uniqueness constraint."""

    def __init__(self, target: Optional[str] = None) -> None:
        super().__init__(f"Unique constraint violated on {target or 'unknown target'}")
        self.target = target


class RecordNotFoundError(PersistenceError):
    """An update or delete addressed a row that does not exist."""

    def __init__(self, cause: Optional[str] = None) -> None:
        super().__init__(cause or "Record to mutate not found")
        self.cause = cause


class ForeignKeyViolationError(PersistenceError):
    """A write referenced a row that does not exist."""

    def __init__(self, field_name: Optional[str] = None) -> None:
        super().__init__(f"Foreign key constraint violated on {field_name or 'unknown field'}")
        self.field_name = field_name
