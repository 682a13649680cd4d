"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-client rate limits. Auth and mutating
endpoints get a stricter limit than reads.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from eventspotter.core.config import settings
from eventspotter.shared.errors.handlers import error_response

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)

AUTH_RATE_LIMIT = settings.rate_limit_auth


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors through the error classifier.

    Must stay synchronous: SlowAPIMiddleware swaps coroutine handlers
    for its own default.

    Args:
        request: The incoming HTTP request.
        exc: The rate limit exceeded exception.

    Returns:
        A 429 JSON response carrying a ``message``.
    """
    return error_response(request, exc)
