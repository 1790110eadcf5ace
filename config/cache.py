# config/cache.py
import logging
from typing import Optional
from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError
from config.settings import settings

logger = logging.getLogger(__name__)

# Shared by the verification-log store, the corpus cache and the rate limiter.
_client: Optional[Redis] = None


def _connect() -> Redis:
    return from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=False,  # repositories decode JSON bytes themselves
        socket_keepalive=True,
        health_check_interval=30,
    )


async def get_redis() -> Redis:
    global _client
    if _client is None:
        client = _connect()
        # Fail fast on startup if Redis is unreachable.
        await client.ping()
        _client = client
        logger.info("redis.connected")
    return _client


async def redis_alive() -> bool:
    """Health probe; never raises."""
    try:
        r = await get_redis()
        return bool(await r.ping())
    except (RedisError, OSError) as e:
        logger.warning("redis.ping.failed err=%s", type(e).__name__)
        return False


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
        logger.info("redis.closed")
