"""
Rate limiting configuration and setup.

Uses slowapi to apply a default per-client limit to every endpoint.
Each application gets its own Limiter, built from its settings.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from usersapi.core.config import Settings

HTTP_429 = 429


def build_limiter(settings: Settings) -> Limiter:
    """Create a Limiter applying the configured default limit.

    Args:
        settings: Resolved application settings.

    Returns:
        An in-memory, per-remote-address limiter.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit_default],
        enabled=settings.rate_limit_enabled,
    )


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Handle rate limit exceeded errors with the standard error body.

    Kept synchronous: SlowAPIMiddleware calls it without awaiting.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.

    Returns:
        A 429 JSON response.
    """
    return JSONResponse(
        status_code=HTTP_429,
        content={"error": f"Rate limit exceeded: {exc.detail}"},
    )
