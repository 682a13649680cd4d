"""
Error taxonomy classifier.

Maps any failure (schema validation, persistence, domain, framework,
unexpected) to one taxonomy kind with an HTTP status and a JSON body.
Classification is pure; logging happens in ``report``.

Priority order:
    1. schema validation                   -> 400 {message, errors}
    2. unique constraint violation         -> 409
    3. record not found on mutate          -> 404
    4. foreign key violation               -> 400
    5. rate limit exceeded                 -> 429
    6. domain errors / explicit 4xx status -> passed through
    7. anything else                       -> 500
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from slowapi.errors import RateLimitExceeded

from eventspotter.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    CapacityExceededError,
    ConflictError,
    EventSpotterError,
    ForeignKeyViolationError,
    InvalidDateRangeError,
    NotFoundError,
    RecordNotFoundError,
    UniqueViolationError,
)
from eventspotter.domain.events.outcomes import (
    CapacityExceeded,
    Forbidden,
    NotFound,
    Outcome,
)

logger = logging.getLogger(__name__)

GENERAL_FIELD = "_general"
REQUEST_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})

VALIDATION_MESSAGE = "Input validation failed"
DEFAULT_CONFLICT_MESSAGE = "A record with these details already exists."
DEFAULT_NOT_FOUND_MESSAGE = "The requested resource was not found."
DEFAULT_REFERENCE_FIELD = "related resource"
PRODUCTION_UNKNOWN_MESSAGE = "An unexpected error occurred on the server."
STACK_TRACE_HINT = "Stack available in server logs."


class ErrorKind(Enum):
    """Client-facing failure taxonomy."""

    VALIDATION = "ValidationError"
    AUTHENTICATION = "AuthenticationError"
    AUTHORIZATION = "AuthorizationError"
    NOT_FOUND = "NotFoundError"
    CONFLICT = "ConflictError"
    CAPACITY_EXCEEDED = "CapacityExceededError"
    RATE_LIMITED = "RateLimitError"
    CLIENT = "ClientError"
    UNKNOWN = "UnknownError"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.CAPACITY_EXCEEDED: 503,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.UNKNOWN: 500,
}

KIND_BY_STATUS = {
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.AUTHORIZATION,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    429: ErrorKind.RATE_LIMITED,
}

DOMAIN_KINDS = (
    (AuthenticationError, ErrorKind.AUTHENTICATION),
    (AuthorizationError, ErrorKind.AUTHORIZATION),
    (NotFoundError, ErrorKind.NOT_FOUND),
    (ConflictError, ErrorKind.CONFLICT),
    (CapacityExceededError, ErrorKind.CAPACITY_EXCEEDED),
)


@dataclass(frozen=True)
class ClassifiedError:
    """A failure resolved to its taxonomy kind and response."""

    kind: ErrorKind
    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def recovered(self) -> bool:
        """True for expected client errors; False for faults that need an operator."""
        return self.kind is not ErrorKind.UNKNOWN


def _strip_value_error_prefix(message: str) -> str:
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message


def field_errors(issues: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Group validation issues into a FieldErrorMap.

    Paths are dot-joined. A leading request location (``body``, ``query``...)
    is dropped. Issues without a path collect under ``_general``.
    """
    errors: dict[str, list[str]] = {}
    for issue in issues:
        loc = list(issue.get("loc") or ())
        if loc and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]
        key = ".".join(str(part) for part in loc) or GENERAL_FIELD
        errors.setdefault(key, []).append(_strip_value_error_prefix(str(issue.get("msg", ""))))
    return errors


class ErrorClassifier:
    """Classifies failures into the client-facing error contract.

    Attributes:
        is_production: Hide raw error text of unknown faults when True.
    """

    def __init__(self, is_production: bool = False) -> None:
        self.is_production = is_production

    def classify(
        self,
        exc: BaseException,
        *,
        conflict_message: Optional[str] = None,
        not_found_message: Optional[str] = None,
    ) -> ClassifiedError:
        """Classify a raised failure.

        Args:
            exc: The exception to classify.
            conflict_message: Domain wording for unique violations.
            not_found_message: Domain wording for missing rows when the
                adapter supplied no cause.
        """
        if isinstance(exc, (RequestValidationError, PydanticValidationError)):
            return self._validation(field_errors(exc.errors()))
        if isinstance(exc, InvalidDateRangeError):
            return self._validation({exc.field: [exc.message]})

        if isinstance(exc, UniqueViolationError):
            return self._build(ErrorKind.CONFLICT, conflict_message or DEFAULT_CONFLICT_MESSAGE)
        if isinstance(exc, RecordNotFoundError):
            return self._build(
                ErrorKind.NOT_FOUND,
                exc.cause or not_found_message or DEFAULT_NOT_FOUND_MESSAGE,
            )
        if isinstance(exc, ForeignKeyViolationError):
            name = exc.field_name or DEFAULT_REFERENCE_FIELD
            return self._build(
                ErrorKind.VALIDATION, f"Invalid input: The specified {name} does not exist."
            )

        if isinstance(exc, RateLimitExceeded):
            return self._build(ErrorKind.RATE_LIMITED, f"Rate limit exceeded: {exc.detail}")

        if isinstance(exc, EventSpotterError):
            for error_type, kind in DOMAIN_KINDS:
                if isinstance(exc, error_type):
                    return self._build(kind, exc.message)

        status_code = getattr(exc, "status_code", None)
        if isinstance(status_code, int) and 400 <= status_code < 500:
            message = getattr(exc, "detail", None) or str(exc)
            kind = KIND_BY_STATUS.get(status_code, ErrorKind.CLIENT)
            return ClassifiedError(kind=kind, status_code=status_code, body={"message": str(message)})

        return self._unknown(exc)

    def classify_outcome(self, outcome: Outcome) -> ClassifiedError:
        """Classify a failed domain outcome (NotFound, Forbidden, CapacityExceeded)."""
        if isinstance(outcome, NotFound):
            return self._build(ErrorKind.NOT_FOUND, outcome.message)
        if isinstance(outcome, Forbidden):
            return self._build(ErrorKind.AUTHORIZATION, outcome.message)
        if isinstance(outcome, CapacityExceeded):
            return self._build(ErrorKind.CAPACITY_EXCEEDED, outcome.message)
        raise TypeError(f"Outcome is not a failure: {outcome!r}")

    def report(
        self,
        classified: ClassifiedError,
        context: Mapping[str, Any],
        exc: Optional[BaseException] = None,
    ) -> None:
        """Log a classified failure with its request context.

        Recovered kinds log at WARNING. Unknown faults log at ERROR
        with the traceback so they alert operators.
        """
        details = " ".join(f"{key}={value}" for key, value in context.items() if value is not None)
        if classified.recovered:
            logger.warning(
                "Request failed: kind=%s, status=%d, %s, error=%r",
                classified.kind.value,
                classified.status_code,
                details,
                exc if exc is not None else classified.body.get("message"),
            )
            return
        logger.error(
            "Unhandled error: kind=%s, status=%d, %s",
            classified.kind.value,
            classified.status_code,
            details,
            exc_info=(type(exc), exc, exc.__traceback__) if exc is not None else None,
        )

    def _validation(self, errors: dict[str, list[str]]) -> ClassifiedError:
        return ClassifiedError(
            kind=ErrorKind.VALIDATION,
            status_code=STATUS_BY_KIND[ErrorKind.VALIDATION],
            body={"message": VALIDATION_MESSAGE, "errors": errors},
        )

    def _unknown(self, exc: BaseException) -> ClassifiedError:
        if self.is_production:
            body = {"message": PRODUCTION_UNKNOWN_MESSAGE}
        else:
            body = {"message": str(exc) or type(exc).__name__}
            if exc.__traceback__ is not None:
                body["stackTraceHint"] = STACK_TRACE_HINT
        return ClassifiedError(kind=ErrorKind.UNKNOWN, status_code=500, body=body)

    @staticmethod
    def _build(kind: ErrorKind, message: str) -> ClassifiedError:
        return ClassifiedError(kind=kind, status_code=STATUS_BY_KIND[kind], body={"message": message})
