import redis.asyncio as redis
from src.core.config import settings
from src.core.logger import get_logger

from shared.utils.retry import retry_async

logger = get_logger("stats.redis")


async def connect_with_retry() -> redis.Redis:
    """Open the Redis connection, retrying while the server comes up."""

    async def _connect():
        r = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            decode_responses=True,
        )
        await r.ping()
        return r

    async def _on_retry(attempt: int, exc: BaseException, sleep_for: float):
        logger.warning(
            "redis_connect_retry",
            extra={
                "attempt": attempt,
                "error": str(exc),
                "sleep_for": round(sleep_for, 2),
            },
        )

    r = await retry_async(
        _connect,
        retries=6,
        base_delay=0.5,
        max_delay=8.0,
        jitter=0.2,
        on_retry=_on_retry,
    )
    logger.info("redis_connected")
    return r
