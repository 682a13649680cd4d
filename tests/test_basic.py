"""
Basic application tests.

Validates that the FastAPI app starts correctly, the health endpoint
responds, security headers are applied and unexpected faults are
rendered safely.
"""

import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from slowapi.errors import RateLimitExceeded

from eventspotter.main import create_app
from eventspotter.shared.errors.classifier import (
    PRODUCTION_UNKNOWN_MESSAGE,
    STACK_TRACE_HINT,
    ErrorClassifier,
)
from eventspotter.shared.logging import QUIET_LOGGERS, configure_logging
from eventspotter.shared.security.headers import SECURE_HEADERS


@pytest.fixture
def faulty_app():
    """Application with a route that fails unexpectedly."""
    application = create_app()

    @application.get("/boom")
    async def boom() -> None:
        raise RuntimeError("database password is hunter2")

    @application.get("/throttled")
    async def throttled() -> None:
        raise RateLimitExceeded(MagicMock(error_message=None, limit="10 per 1 minute"))

    return application


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self, client) -> None:
        """Health endpoint must return HTTP 200 with status ok."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

    def test_health_response_body(self, client) -> None:
        """Health endpoint must return status and version fields."""
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert "version" in body


class TestSecurityHeaders:
    """Tests for security headers on responses."""

    def test_security_headers_present(self, client) -> None:
        """All security headers must be present on every response."""
        response = client.get("/api/v1/health")
        for name, value in SECURE_HEADERS.items():
            assert response.headers[name] == value

    def test_security_headers_on_client_errors(self, client) -> None:
        """Error responses carry the headers too."""
        response = client.get("/api/v1/events/not-a-uuid")
        assert response.status_code == 400
        assert response.headers["X-Frame-Options"] == "DENY"


class TestUnknownErrors:
    """Tests for rendering of unexpected faults."""

    def test_development_exposes_message_and_hint(self, faulty_app) -> None:
        response = TestClient(faulty_app, raise_server_exceptions=False).get("/boom")
        assert response.status_code == 500
        assert response.json() == {
            "message": "database password is hunter2",
            "stackTraceHint": STACK_TRACE_HINT,
        }

    def test_production_hides_details(self, faulty_app) -> None:
        faulty_app.state.error_classifier = ErrorClassifier(is_production=True)
        response = TestClient(faulty_app, raise_server_exceptions=False).get("/boom")
        assert response.status_code == 500
        assert response.json() == {"message": PRODUCTION_UNKNOWN_MESSAGE}

    def test_unknown_errors_carry_security_headers(self, faulty_app) -> None:
        response = TestClient(faulty_app, raise_server_exceptions=False).get("/boom")
        assert response.status_code == 500
        for name, value in SECURE_HEADERS.items():
            assert response.headers[name] == value

    def test_unknown_route_is_not_found(self, client) -> None:
        response = client.get("/api/v1/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}


class TestRateLimitErrors:
    """Tests for rendering of rate limit rejections."""

    def test_rate_limit_goes_through_classifier(self, faulty_app, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="eventspotter.shared.errors.classifier"):
            response = TestClient(faulty_app).get("/throttled")

        assert response.status_code == 429
        assert response.json() == {"message": "Rate limit exceeded: 10 per 1 minute"}
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "kind=RateLimitError" in record.getMessage()
        assert "operation=GET /throttled" in record.getMessage()


class TestLoggingConfiguration:
    """Tests for configure_logging."""

    def test_library_loggers_quieted(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_sql_echo_keeps_statements(self) -> None:
        configure_logging(level="INFO", sql_echo=True)
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
        configure_logging(level="INFO")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
