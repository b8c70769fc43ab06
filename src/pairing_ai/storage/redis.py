"""Redis client and connection pool management.

This module provides:
- The async Redis connection pool backing the pairing audit log
- Connection lifecycle management via lifespan events
- Health reporting for the readiness check
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from pairing_ai.core.config import Settings, get_settings
from pairing_ai.observability.logging import get_logger


if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)

# Global connection pool and client
_pool: ConnectionPool[Any] | None = None
_client: Redis[Any] | None = None


async def init_redis_pool(settings: Settings | None = None) -> Redis[Any]:
    """Initialize the Redis connection pool and verify connectivity.

    Should be called during application startup (lifespan).

    Raises:
        redis.ConnectionError: If Redis cannot be reached.
    """
    global _pool, _client  # noqa: PLW0603

    settings = settings or get_settings()

    logger.info(
        "Initializing Redis connection",
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
    )

    _pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis.max_connections,
        decode_responses=True,
    )
    _client = redis.Redis(connection_pool=_pool)

    try:
        await _client.ping()
    except redis.ConnectionError:
        logger.exception("Failed to connect to Redis")
        await close_redis_pool()
        raise

    logger.info("Redis connection established successfully")
    return _client


async def close_redis_pool() -> None:
    """Close the Redis connection pool.

    Should be called during application shutdown (lifespan).
    """
    global _pool, _client  # noqa: PLW0603

    if _client:
        await _client.aclose()
        _client = None

    if _pool:
        await _pool.disconnect()
        _pool = None

    logger.info("Redis connections closed")


def get_redis_client() -> Redis[Any]:
    """Get the Redis client.

    Raises:
        RuntimeError: If Redis is not initialized.
    """
    if _client is None:
        msg = "Redis client not initialized. Call init_redis_pool() first."
        raise RuntimeError(msg)
    return _client


async def check_redis_health() -> dict[str, str]:
    """Check health of the Redis connection.

    Returns:
        Dictionary with the health status of the audit log store.
    """
    if _client is None:
        return {"redis": "not_initialized"}

    try:
        await _client.ping()
    except (redis.ConnectionError, redis.TimeoutError):
        return {"redis": "unhealthy"}
    return {"redis": "healthy"}
