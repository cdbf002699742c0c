"""
Application factory.

Creates the FastAPI application and wires together:
- Routers (health and users)
- Error handlers (centralized error-to-HTTP mapping)
- Security middleware (headers, rate limiting)

The user service is passed in explicitly; opening the database and
building the layers beneath it is the server's job. No business
logic belongs here, and nothing is created at import time.
"""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from usersapi.application.users.user_service import UserService
from usersapi.core.config import Settings
from usersapi.interfaces.health import router as health_router
from usersapi.interfaces.users.router import router as users_router
from usersapi.shared.errors.handlers import register_error_handlers
from usersapi.shared.security.headers import SecurityHeadersMiddleware
from usersapi.shared.security.rate_limiting import (
    build_limiter,
    rate_limit_exceeded_handler,
)


def create_app(settings: Settings, user_service: UserService) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Resolved application settings.
        user_service: The service every users route delegates to.

    Returns:
        A fully configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.user_service = user_service

    # --- Rate Limiting ---
    app.state.limiter = build_limiter(settings)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(users_router)

    return app
