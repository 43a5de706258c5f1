"""
Optional Redis cache. With REDIS_URL unset, or Redis unreachable, every lookup
is a miss and writes are dropped, so callers never need to special-case it.
"""

import json
from typing import Any, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from sportsapp.core.config import settings
from sportsapp.core.logging_config import logger


def cache_url(base_url: str, db: int) -> str:
    """REDIS_URL pointed at the cache database number"""
    return f"{base_url.rsplit('/', 1)[0]}/{db}"


class RedisClient:
    """JSON values with a TTL, keyed by plain strings"""

    def __init__(self):
        self._redis: Optional[aioredis.Redis] = None

    @property
    def enabled(self) -> bool:
        return self._redis is not None

    async def connect(self):
        if not settings.REDIS_URL:
            logger.info("[Cache] REDIS_URL not set, running without a cache")
            return

        client = aioredis.from_url(
            cache_url(settings.REDIS_URL, settings.REDIS_CACHE_DB),
            encoding="utf-8",
            decode_responses=True,
        )
        try:
            await client.ping()
        except (RedisError, OSError) as e:
            logger.error(f"[Cache] Redis unreachable, running without a cache: {e}")
            await client.aclose()
            return
        self._redis = client
        logger.info("[Cache] Connected to Redis")

    async def disconnect(self):
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

    async def cache_get(self, key: str) -> Optional[Any]:
        if self._redis is None:
            return None
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            logger.warning(f"[Cache] read of {key} failed: {e}")
            return None
        return json.loads(raw) if raw else None

    async def cache_set(self, key: str, value: Any, expire: int = 3600) -> bool:
        if self._redis is None:
            return False
        try:
            await self._redis.set(key, json.dumps(value, default=str), ex=expire)
        except RedisError as e:
            logger.warning(f"[Cache] write of {key} failed: {e}")
            return False
        return True


redis_client = RedisClient()
