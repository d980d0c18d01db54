# tarot_api/services/cache_services.py
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from pydantic import TypeAdapter
from redis.exceptions import RedisError

from tarot_api.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheAsideRepository:
    """
    Cache-aside access to the backing store.

    Reads check Redis first and populate it on a miss; writes never touch the
    cache, so cached aggregates stay stale until their TTL runs out.
    Store operations run through `execute`, which retries every failure up to
    `max_attempts` times with exponential backoff.
    """

    def __init__(
        self,
        client,
        max_attempts: int = settings.STORE_MAX_ATTEMPTS,
        backoff_seconds: float = settings.STORE_BACKOFF_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.client = client
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.client.get(key)
        except RedisError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self.client.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await operation()
            except Exception as e:
                last_error = e
                logger.warning(f"Database operation failed (attempt {attempt}/{self.max_attempts}): {e}")

                if attempt == self.max_attempts:
                    break

                await self._sleep((2 ** attempt) * self.backoff_seconds)

        raise last_error

    async def get_or_compute(
        self,
        key: str,
        ttl_seconds: int,
        fetch: Callable[[], Awaitable[T]],
        adapter: TypeAdapter,
    ) -> Optional[T]:
        cached = await self.get(key)
        if cached is not None:
            logger.info(f"Cache hit: {key}")
            return adapter.validate_json(cached)

        logger.info(f"Cache miss: {key}")
        value = await self.execute(fetch)
        if value is None:
            return None

        value = adapter.validate_python(value, from_attributes=True)
        await self.set(key, adapter.dump_json(value).decode("utf-8"), ttl_seconds)
        return value
