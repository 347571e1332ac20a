"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from together.config import Settings
from together.interface.api.guard import RouteGuard, RouteGuardMiddleware
from together.interface.api.routes import (
    auth,
    events,
    health,
    invitations,
    lists,
    notifications,
    pages,
    subscriptions,
    tasks,
    webhooks,
)
from together.interface.error import register_error_handlers
from together.util.di.container import create_container, setup_di
from together.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container; the production container when omitted.
            Tests pass a container built from mock providers.
    """
    settings = Settings()

    # Instrument httpx for outbound platform and payment requests
    instrument_httpx()

    app_instance = FastAPI(
        title="ListTogether API",
        description="Backend API for ListTogether - shared to-do lists with invitations and realtime updates",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Runs inside CORS so redirects still carry CORS headers
    app_instance.add_middleware(
        RouteGuardMiddleware,
        guard=RouteGuard(settings.guard),
        platform_settings=settings.platform,
        cookie_name=settings.auth.cookie_name,
    )

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "Cache-Control",
            "X-Requested-With",
            "Stripe-Signature",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    setup_di(app_instance, container or create_container(settings))

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(lists.router)
    app_instance.include_router(tasks.router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(notifications.router)
    app_instance.include_router(subscriptions.router)
    app_instance.include_router(webhooks.router)
    app_instance.include_router(events.router)
    app_instance.include_router(pages.router)

    register_error_handlers(app_instance)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
