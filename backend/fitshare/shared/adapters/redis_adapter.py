"""
Redis adapter - Read-through cache for list and profile reads.

Provides:
- JSON get/set with TTL
- Key and pattern invalidation (SCAN + DEL)
- Deterministic key builders for filtered, paginated lists

Every operation is advisory. A RedisError or an undecodable value is logged
and turned into a miss or a no-op, so callers always fall through to the
database and a cache outage never fails a request.
"""

import json
import logging
from typing import Any, Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from ...config.settings import settings

logger = logging.getLogger(__name__)


class Cache(Protocol):
    """Interface the services depend on (RedisCache in production)."""

    async def get_json(self, key: str) -> Optional[Any]: ...

    async def set_json(self, key: str, value: Any, ttl: Optional[int] = None) -> bool: ...

    async def delete(self, key: str) -> bool: ...

    async def delete_pattern(self, pattern: str) -> int: ...


def build_list_key(prefix: str, filters: dict[str, Any], page: int, limit: int) -> str:
    """
    Cache key for one page of a filtered list.

    None-valued filters are dropped and keys are sorted, so the same query
    always maps to the same key:

        build_list_key("posts", {"type": "meal", "user_id": None}, 1, 2)
        → 'posts:{"type":"meal"}:page:1:limit:2'
    """
    present = {k: v for k, v in filters.items() if v is not None}
    encoded = json.dumps(present, sort_keys=True, separators=(",", ":"), default=str)
    return f"{prefix}:{encoded}:page:{page}:limit:{limit}"


class RedisCache:
    """
    Adapter for Redis cache operations (redis.asyncio).

    Constructed explicitly at startup and closed at shutdown.
    """

    def __init__(self, url: Optional[str] = None, client: Optional[redis.Redis] = None):
        """
        Initialize Redis cache.

        Args:
            url: Redis URL (redis://host:port/db)
            client: Pre-built client (tests)
        """
        self.url = url or settings.REDIS_URL
        self._client = client

    @property
    def client(self) -> redis.Redis:
        """Lazy-loaded Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
            )
        return self._client

    async def get_json(self, key: str) -> Optional[Any]:
        """
        Get a JSON value from cache.

        Returns:
            Parsed JSON, or None on miss, error, or corrupt value
        """
        try:
            value = await self.client.get(key)
        except RedisError as e:
            logger.warning("Redis get failed for %s: %s", key, e)
            return None

        if value is None:
            return None
        try:
            return json.loads(value)
        except (TypeError, ValueError) as e:
            logger.warning("Discarding undecodable cache value for %s: %s", key, e)
            return None

    async def set_json(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set a JSON value in cache.

        Args:
            key: Cache key
            value: JSON-serializable value
            ttl: Time-to-live in seconds

        Returns:
            True if successful
        """
        try:
            payload = json.dumps(value, default=str)
            if ttl:
                await self.client.setex(key, ttl, payload)
            else:
                await self.client.set(key, payload)
            return True
        except (RedisError, TypeError, ValueError) as e:
            logger.warning("Redis set failed for %s: %s", key, e)
            return False

    async def delete(self, key: str) -> bool:
        """
        Delete a key from cache.

        Returns:
            True if key was deleted
        """
        try:
            return bool(await self.client.delete(key))
        except RedisError as e:
            logger.warning("Redis delete failed for %s: %s", key, e)
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """
        Delete every key matching a glob pattern (e.g. "posts:*").

        Uses SCAN so large keyspaces are not blocked.

        Returns:
            Number of keys deleted
        """
        deleted = 0
        try:
            batch: list[str] = []
            async for key in self.client.scan_iter(match=pattern, count=500):
                batch.append(key)
                if len(batch) >= 500:
                    deleted += await self.client.delete(*batch)
                    batch = []
            if batch:
                deleted += await self.client.delete(*batch)
        except RedisError as e:
            logger.warning("Redis pattern delete failed for %s: %s", pattern, e)
        return deleted

    async def ping(self) -> bool:
        """
        Check Redis connectivity.

        Returns:
            True if connected
        """
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the connection pool."""
        if self._client is not None:
            try:
                await self._client.aclose()
            except RedisError as e:
                logger.warning("Redis close failed: %s", e)
            self._client = None
