"""Redis client used as an optional cache for notification counters."""

from typing import Optional
from uuid import UUID

import redis.asyncio as redis

from ..config import get_settings
from .logging import get_logger

logger = get_logger("redis")


class RedisClient:
    """Thin async Redis wrapper.

    Every method degrades to a no-op when Redis is not connected, so callers
    can treat the cache as best-effort and fall back to the database.
    """

    def __init__(self):
        self.settings = get_settings()
        self.redis: Optional[redis.Redis] = None

    @property
    def is_connected(self) -> bool:
        return self.redis is not None

    async def connect(self) -> None:
        """Connect to Redis."""
        client = redis.from_url(
            self.settings.redis_url,
            max_connections=self.settings.redis_max_connections,
            decode_responses=True,
        )
        try:
            await client.ping()
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            await client.aclose()
            raise
        self.redis = client
        logger.info("Connected to Redis successfully")

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    async def get(self, key: str) -> Optional[str]:
        """Get value from Redis."""
        if not self.redis:
            return None
        try:
            return await self.redis.get(key)
        except Exception as e:
            logger.error(f"Redis GET error for key {key}: {e}")
            return None

    async def set(self, key: str, value: str, expire: Optional[int] = None) -> bool:
        """Set value in Redis with optional expiration."""
        if not self.redis:
            return False
        try:
            if expire:
                return bool(await self.redis.setex(key, expire, value))
            return bool(await self.redis.set(key, value))
        except Exception as e:
            logger.error(f"Redis SET error for key {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        """Delete key from Redis."""
        if not self.redis:
            return False
        try:
            result = await self.redis.delete(key)
            return result > 0
        except Exception as e:
            logger.error(f"Redis DELETE error for key {key}: {e}")
            return False

    async def incr(self, key: str) -> Optional[int]:
        """Increment an integer key, creating it at 1."""
        if not self.redis:
            return None
        try:
            return await self.redis.incr(key)
        except Exception as e:
            logger.error(f"Redis INCR error for key {key}: {e}")
            return None

    # Unread notification counters
    #
    # Cached counts are stamped with the generation they were computed under.
    # Every invalidation bumps the generation, so a count read from the
    # database before a concurrent change can never be served after it.
    @staticmethod
    def unread_count_key(user_id: UUID) -> str:
        return f"notifications:unread:{user_id}"

    @staticmethod
    def unread_generation_key(user_id: UUID) -> str:
        return f"notifications:unread:{user_id}:generation"

    async def get_unread_generation(self, user_id: UUID) -> int:
        raw = await self.get(self.unread_generation_key(user_id))
        try:
            return int(raw) if raw is not None else 0
        except ValueError:
            return 0

    async def cache_unread_count(self, user_id: UUID, count: int, generation: int) -> bool:
        """Cache a count computed under ``generation`` for the configured TTL."""
        return await self.set(
            self.unread_count_key(user_id),
            f"{generation}:{count}",
            self.settings.unread_count_cache_ttl,
        )

    async def get_cached_unread_count(self, user_id: UUID) -> Optional[int]:
        """The cached count, or None if absent or computed under an older generation."""
        cached = await self.get(self.unread_count_key(user_id))
        if cached is None:
            return None
        try:
            generation, count = (int(part) for part in cached.split(":", 1))
        except ValueError:
            logger.warning(f"Discarding malformed unread count for user {user_id}: {cached!r}")
            return None

        if generation != await self.get_unread_generation(user_id):
            return None
        return count

    async def invalidate_unread_count(self, user_id: UUID) -> bool:
        await self.incr(self.unread_generation_key(user_id))
        return await self.delete(self.unread_count_key(user_id))


# Singleton instance
_redis_client: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Get Redis client singleton."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client
