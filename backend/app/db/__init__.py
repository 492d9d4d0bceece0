"""Storage package — shared Redis client."""

from app.db.redis import close_redis, get_redis, init_redis, redis_ready

__all__ = [
    "close_redis",
    "get_redis",
    "init_redis",
    "redis_ready",
]
