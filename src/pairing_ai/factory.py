"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up middleware stack in the correct order
- Registers exception handlers
- Mounts API routers
- Configures metrics
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pairing_ai.api.router import router as pairing_router
from pairing_ai.core.config import Settings, get_settings
from pairing_ai.core.events import lifespan
from pairing_ai.core.exceptions import setup_exception_handlers
from pairing_ai.core.middleware.logging import LoggingMiddleware
from pairing_ai.core.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from pairing_ai.core.middleware.timing import PROCESS_TIME_HEADER, TimingMiddleware
from pairing_ai.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Wine and cheese pairing recommendations for Saveurs Maison",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_non_production else None,
        redoc_url="/redoc" if settings.is_non_production else None,
        openapi_url="/openapi.json" if settings.is_non_production else None,
        debug=settings.app.debug,
    )

    # Store settings in app state for the lifespan and dependencies
    app.state.settings = settings

    setup_exception_handlers(app)

    # Setup middleware (order matters - first added = last executed)
    _setup_middleware(app, settings)

    app.include_router(pairing_router, prefix=settings.api.prefix)

    # After routes are mounted
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Order from request perspective:
    1. RequestIDMiddleware (adds request ID for correlation)
    2. TimingMiddleware (measures request time)
    3. LoggingMiddleware (logs requests/responses)
    4. CORSMiddleware (handles CORS)
    """
    # CORS - must be added first (runs last on request, first on response)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials="*" not in settings.api.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[REQUEST_ID_HEADER, PROCESS_TIME_HEADER],
        )

    app.add_middleware(LoggingMiddleware, api_settings=settings.api)

    app.add_middleware(TimingMiddleware, api_settings=settings.api)

    # Runs first on request
    app.add_middleware(RequestIDMiddleware)
