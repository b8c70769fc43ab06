"""Storage backends."""

from pairing_ai.storage.redis import (
    check_redis_health,
    close_redis_pool,
    get_redis_client,
    init_redis_pool,
)


__all__ = [
    "check_redis_health",
    "close_redis_pool",
    "get_redis_client",
    "init_redis_pool",
]
