"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.config import Settings
from portal.interface.api.guard import RouteGuardMiddleware
from portal.interface.api.routes import auth, health, invitations
from portal.interface.error import register_error_handlers
from portal.util.di.container import create_container, setup_di
from portal.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        container: DI container to use; the production container when omitted

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()

    # Instrument httpx for Auth Provider and Resend calls
    instrument_httpx()

    app_instance = FastAPI(
        title="Portal Auth API",
        description="Team and client authentication, invitations and account provisioning",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(RouteGuardMiddleware)
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.app_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,
    )

    register_error_handlers(app_instance)

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(invitations.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
