"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: logging, Redis, HTTP clients, pairing service
- Application shutdown: drain audit writes, close connections
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from pairing_ai.clients.catalog.client import CatalogClient
from pairing_ai.core.config import Settings, get_settings
from pairing_ai.llm.client.openai import OpenAIClient
from pairing_ai.observability.logging import get_logger, setup_logging
from pairing_ai.services.audit.repository import PairingLogRepository
from pairing_ai.services.pairing.service import PairingService
from pairing_ai.storage.redis import close_redis_pool, init_redis_pool


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI
    from redis.asyncio import Redis

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application components and store them on ``app.state``.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Redis backs the audit log only (non-critical)
    redis_client = await _init_redis(settings)
    app.state.redis_client = redis_client
    app.state.pairing_log_repository = (
        PairingLogRepository(redis_client) if redis_client is not None else None
    )

    catalog_client = CatalogClient(
        base_url=settings.catalog.url,
        timeout=settings.catalog.timeout,
        in_stock_only=settings.catalog.in_stock_only,
    )
    await catalog_client.initialize()
    app.state.catalog_client = catalog_client

    llm_client = OpenAIClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.llm.model,
        base_url=settings.llm.url,
        timeout=settings.llm.timeout,
        max_tokens=settings.llm.max_tokens,
        temperature=settings.llm.temperature,
        max_retries=settings.llm.max_retries,
        requests_per_minute=settings.llm.requests_per_minute,
    )
    await llm_client.initialize()
    app.state.llm_client = llm_client

    pairing_service = PairingService(
        catalog_client=catalog_client,
        llm_client=llm_client,
        log_repository=app.state.pairing_log_repository,
        settings=settings.pairing,
    )
    await pairing_service.initialize()
    app.state.pairing_service = pairing_service

    logger.info("Application startup complete")


async def _init_redis(settings: Settings) -> Redis[Any] | None:
    """Connect to Redis; the service keeps running without it."""
    try:
        return await init_redis_pool(settings)
    except Exception:
        logger.exception(
            "Failed to initialize Redis - pairing audit log and history unavailable"
        )
        return None


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application components.

    Args:
        app: The FastAPI application instance.
    """
    logger.info("Shutting down application")

    # Pending audit writes need Redis, so the service goes first
    pairing_service: PairingService | None = getattr(app.state, "pairing_service", None)
    if pairing_service is not None:
        await pairing_service.shutdown()

    llm_client: OpenAIClient | None = getattr(app.state, "llm_client", None)
    if llm_client is not None:
        await llm_client.shutdown()

    catalog_client: CatalogClient | None = getattr(app.state, "catalog_client", None)
    if catalog_client is not None:
        await catalog_client.shutdown()

    await close_redis_pool()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
