"""
Centralized error handlers for FastAPI.

Every failure of a request, raised or returned as a domain outcome,
passes through the ErrorClassifier exactly once and is logged with
the request's context. No stack traces or internal details are
exposed to clients outside non-production environments.
"""

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventspotter.domain.errors import EventSpotterError, PersistenceError
from eventspotter.domain.events.outcomes import Outcome
from eventspotter.shared.errors.classifier import ClassifiedError, ErrorClassifier
from eventspotter.shared.security.headers import SECURE_HEADERS

logger = logging.getLogger(__name__)


def _classifier(request: Request) -> ErrorClassifier:
    return request.app.state.error_classifier


def request_context(request: Request) -> dict[str, Any]:
    """Collect the operation, identifiers and principal of a request for logging."""
    route = request.scope.get("route")
    path = getattr(route, "path", request.url.path)
    principal = getattr(request.state, "principal", None)
    context: dict[str, Any] = {"operation": f"{request.method} {path}"}
    context.update({key: value for key, value in request.path_params.items()})
    context["user_id"] = principal.id if principal is not None else None
    return context


def _to_response(classified: ClassifiedError) -> JSONResponse:
    # 500s are rendered by ServerErrorMiddleware, outside SecurityHeadersMiddleware.
    return JSONResponse(
        status_code=classified.status_code,
        content=classified.body,
        headers=SECURE_HEADERS,
    )


def error_messages(conflict: Optional[str] = None, not_found: Optional[str] = None):
    """Route dependency supplying domain wording for persistence errors.

    Usage::

        @router.post("/", dependencies=[error_messages(conflict="...")])
    """

    def _set_messages(request: Request) -> None:
        request.state.conflict_message = conflict
        request.state.not_found_message = not_found

    return Depends(_set_messages)


def outcome_response(request: Request, outcome: Outcome) -> JSONResponse:
    """Classify, log and render a failed domain outcome."""
    classifier = _classifier(request)
    classified = classifier.classify_outcome(outcome)
    classifier.report(classified, request_context(request))
    return _to_response(classified)


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Classify, log and render any raised failure."""
    classifier = _classifier(request)
    classified = classifier.classify(
        exc,
        conflict_message=getattr(request.state, "conflict_message", None),
        not_found_message=getattr(request.state, "not_found_message", None),
    )
    classifier.report(classified, request_context(request), exc)
    return _to_response(classified)


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    return error_response(request, exc)


def register_error_handlers(app: FastAPI, is_production: bool = False) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
        is_production: Hide raw error text of unexpected faults.
    """
    app.state.error_classifier = ErrorClassifier(is_production=is_production)

    for exc_class in (
        RequestValidationError,
        StarletteHTTPException,
        EventSpotterError,
        PersistenceError,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_exception)

    logger.debug("Error handlers registered (production=%s)", is_production)
