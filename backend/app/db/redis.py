"""Redis client shared by the Stripe event claims and the credit ledger."""

import redis.asyncio as redis
import structlog
from redis.exceptions import RedisError

from app.core.config import get_settings

logger = structlog.get_logger(__name__)

_client: redis.Redis | None = None


async def init_redis(url: str | None = None) -> redis.Redis:
    """Connect the shared client and verify it with a PING.

    Calling it again while connected returns the existing client.
    """
    global _client

    if _client is not None:
        return _client

    client = redis.from_url(url or get_settings().redis_url, decode_responses=True)
    await client.ping()
    _client = client

    pool_kwargs = client.connection_pool.connection_kwargs
    logger.info("redis_connected", host=pool_kwargs.get("host"), db=pool_kwargs.get("db"))
    return _client


async def close_redis() -> None:
    """Close the shared client; a no-op when not connected."""
    global _client

    if _client is not None:
        await _client.aclose()
        _client = None
        logger.info("redis_closed")


def get_redis() -> redis.Redis:
    """FastAPI dependency returning the shared client.

    Raises:
        RuntimeError: If init_redis() has not run (app lifespan not started)
    """
    if _client is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _client


async def redis_ready() -> bool:
    """True when the shared client is connected and answers a PING."""
    if _client is None:
        logger.warning("redis_not_initialized")
        return False
    try:
        await _client.ping()
    except RedisError as e:
        logger.error("redis_ping_failed", error=str(e), error_type=type(e).__name__)
        return False
    return True
