"""
Tests for the ErrorClassifier.

Each failure family maps to exactly one kind, status and body.
"""

import logging
from unittest.mock import MagicMock

import pytest
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventspotter.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    CapacityExceededError,
    ConflictError,
    ForeignKeyViolationError,
    InvalidDateRangeError,
    NotFoundError,
    RecordNotFoundError,
    UniqueViolationError,
)
from eventspotter.domain.events.outcomes import (
    AlreadySaved,
    CapacityExceeded,
    Forbidden,
    NotFound,
)
from eventspotter.shared.errors.classifier import (
    PRODUCTION_UNKNOWN_MESSAGE,
    STACK_TRACE_HINT,
    ErrorClassifier,
    ErrorKind,
    field_errors,
)


def _raised(exc: Exception) -> Exception:
    """Return ``exc`` with a traceback attached."""
    try:
        raise exc
    except Exception as caught:  # noqa: BLE001
        return caught


@pytest.fixture
def classifier() -> ErrorClassifier:
    return ErrorClassifier(is_production=False)


class TestFieldErrors:
    """Tests for FieldErrorMap construction."""

    def test_groups_by_field_and_strips_location(self) -> None:
        """Issues collect per field; the request location prefix is dropped."""
        errors = field_errors(
            [
                {"loc": ("body", "title"), "msg": "String should have at least 3 characters"},
                {"loc": ("body", "title"), "msg": "Second problem"},
                {"loc": ("query", "limit"), "msg": "Input should be less than or equal to 100"},
            ]
        )
        assert errors == {
            "title": ["String should have at least 3 characters", "Second problem"],
            "limit": ["Input should be less than or equal to 100"],
        }

    def test_nested_paths_dot_joined(self) -> None:
        """List and nested positions join with dots."""
        errors = field_errors([{"loc": ("body", "tags", 2), "msg": "too long"}])
        assert errors == {"tags.2": ["too long"]}

    def test_pathless_issue_goes_to_general(self) -> None:
        """Whole-object issues land under _general without the value error prefix."""
        errors = field_errors([{"loc": ("body",), "msg": "Value error, At least one field"}])
        assert errors == {"_general": ["At least one field"]}


class TestClassify:
    """Tests for ErrorClassifier.classify priority order."""

    def test_request_validation(self, classifier: ErrorClassifier) -> None:
        exc = RequestValidationError(
            [{"loc": ("body", "title"), "msg": "too short", "type": "string_too_short"}]
        )
        result = classifier.classify(exc)
        assert result.kind is ErrorKind.VALIDATION
        assert result.status_code == 400
        assert result.body == {"message": "Input validation failed", "errors": {"title": ["too short"]}}

    def test_invalid_date_range(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(InvalidDateRangeError())
        assert result.status_code == 400
        assert result.body["errors"] == {"endDate": ["endDate cannot be before startDate"]}

    def test_unique_violation_uses_supplied_message(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(UniqueViolationError("x_key"), conflict_message="Taken.")
        assert (result.kind, result.status_code) == (ErrorKind.CONFLICT, 409)
        assert result.body == {"message": "Taken."}

    def test_unique_violation_default_message(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(UniqueViolationError())
        assert result.status_code == 409
        assert result.body["message"]

    def test_record_not_found_prefers_cause(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(
            RecordNotFoundError("Record to delete does not exist."), not_found_message="Event not found."
        )
        assert result.status_code == 404
        assert result.body == {"message": "Record to delete does not exist."}

    def test_record_not_found_falls_back_to_supplied(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(RecordNotFoundError(), not_found_message="Event not found.")
        assert result.body == {"message": "Event not found."}

    def test_foreign_key_names_field(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(ForeignKeyViolationError("eventId"))
        assert (result.kind, result.status_code) == (ErrorKind.VALIDATION, 400)
        assert result.body == {"message": "Invalid input: The specified eventId does not exist."}

    def test_foreign_key_without_field(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(ForeignKeyViolationError())
        assert result.body["message"] == "Invalid input: The specified related resource does not exist."

    @pytest.mark.parametrize(
        "exc,kind,status",
        [
            (AuthenticationError(), ErrorKind.AUTHENTICATION, 401),
            (AuthorizationError("no"), ErrorKind.AUTHORIZATION, 403),
            (NotFoundError("Event not found."), ErrorKind.NOT_FOUND, 404),
            (ConflictError("dup"), ErrorKind.CONFLICT, 409),
            (CapacityExceededError("full", limit=500), ErrorKind.CAPACITY_EXCEEDED, 503),
        ],
    )
    def test_domain_errors(self, classifier: ErrorClassifier, exc, kind, status) -> None:
        result = classifier.classify(exc)
        assert (result.kind, result.status_code) == (kind, status)
        assert result.body == {"message": exc.message}

    def test_explicit_client_status_passes_through(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(StarletteHTTPException(status_code=405, detail="Method Not Allowed"))
        assert result.status_code == 405
        assert result.kind is ErrorKind.CLIENT
        assert result.body == {"message": "Method Not Allowed"}

    def test_rate_limit_exceeded(self, classifier: ErrorClassifier) -> None:
        exc = RateLimitExceeded(MagicMock(error_message=None, limit="10 per 1 minute"))
        result = classifier.classify(exc)
        assert result.status_code == 429
        assert result.kind is ErrorKind.RATE_LIMITED
        assert result.body == {"message": "Rate limit exceeded: 10 per 1 minute"}
        assert result.recovered

    def test_http_404_is_not_found_kind(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(StarletteHTTPException(status_code=404, detail="Not Found"))
        assert result.kind is ErrorKind.NOT_FOUND

    def test_unknown_in_development_exposes_message(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(_raised(RuntimeError("boom")))
        assert result.status_code == 500
        assert result.body == {"message": "boom", "stackTraceHint": STACK_TRACE_HINT}
        assert not result.recovered

    def test_unknown_in_production_is_generic(self) -> None:
        result = ErrorClassifier(is_production=True).classify(_raised(RuntimeError("secret detail")))
        assert result.status_code == 500
        assert result.body == {"message": PRODUCTION_UNKNOWN_MESSAGE}

    def test_server_side_http_exception_is_unknown(self, classifier: ErrorClassifier) -> None:
        result = classifier.classify(StarletteHTTPException(status_code=502, detail="Bad Gateway"))
        assert result.kind is ErrorKind.UNKNOWN


class TestClassifyOutcome:
    """Tests for ErrorClassifier.classify_outcome."""

    @pytest.mark.parametrize(
        "outcome,status",
        [
            (NotFound(), 404),
            (Forbidden(), 403),
            (CapacityExceeded(message="Event saving limit reached.", limit=1), 503),
        ],
    )
    def test_failed_outcomes(self, classifier: ErrorClassifier, outcome, status) -> None:
        result = classifier.classify_outcome(outcome)
        assert result.status_code == status
        assert result.body == {"message": outcome.message}

    def test_success_outcome_rejected(self, classifier: ErrorClassifier) -> None:
        with pytest.raises(TypeError):
            classifier.classify_outcome(AlreadySaved())


class TestReport:
    """Tests for ErrorClassifier.report log levels."""

    def test_recovered_logs_warning(self, classifier: ErrorClassifier, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="eventspotter.shared.errors.classifier"):
            classifier.report(classifier.classify(NotFoundError("gone")), {"operation": "GET /x"})
        assert caplog.records[-1].levelno == logging.WARNING
        assert "operation=GET /x" in caplog.records[-1].getMessage()

    def test_unknown_logs_error_with_traceback(self, classifier: ErrorClassifier, caplog) -> None:
        exc = _raised(RuntimeError("boom"))
        with caplog.at_level(logging.WARNING, logger="eventspotter.shared.errors.classifier"):
            classifier.report(classifier.classify(exc), {"operation": "GET /x"}, exc)
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.exc_info is not None
