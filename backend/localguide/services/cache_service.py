"""Redis cache service for availability counts."""

import json
import logging
from typing import Any

import redis.asyncio as redis

from localguide.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """Redis-backed cache. Every error is a miss; the cache never fails a caller."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._redis: redis.Redis | None = None

    async def _get_redis(self) -> redis.Redis | None:
        if not self.enabled:
            return None
        if self._redis is None:
            try:
                self._redis = redis.from_url(
                    settings.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_timeout=settings.redis_socket_timeout_seconds,
                    socket_connect_timeout=settings.redis_socket_timeout_seconds,
                )
                await self._redis.ping()
            except Exception as e:
                logger.warning(f"Redis unavailable, skipping cache: {e}")
                self._redis = None
                return None
        return self._redis

    async def get(self, key: str) -> Any | None:
        """Get a value from cache. Returns None on miss or error."""
        try:
            r = await self._get_redis()
            if r is None:
                return None
            raw = await r.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except Exception:
            return None

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Set a value in cache with TTL. Returns False on error."""
        try:
            r = await self._get_redis()
            if r is None:
                return False
            await r.set(key, json.dumps(value, default=str), ex=ttl)
            return True
        except Exception:
            return False

    # Typed helpers

    def availability_key(self, listing_type: str, listing_id: str, start: str, end: str) -> str:
        return f"availability:{listing_type}:{listing_id}:{start}:{end}"

    async def get_open_count(self, listing_type: str, listing_id: str, start: str, end: str) -> int | None:
        value = await self.get(self.availability_key(listing_type, listing_id, start, end))
        return value if isinstance(value, int) else None

    async def set_open_count(self, listing_type: str, listing_id: str, start: str, end: str, count: int):
        await self.set(
            self.availability_key(listing_type, listing_id, start, end),
            count,
            settings.availability_cache_ttl,
        )

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None


cache_service = CacheService(enabled=settings.cache_enabled)
