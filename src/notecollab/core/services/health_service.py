"""Health service implementation."""

import time
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ... import __version__
from ..redis_client import RedisClient, get_redis_client
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


class HealthService(IHealthService):
    """Health check service implementation.

    The database is required; Redis is an optional cache, so losing it only
    degrades the service.
    """

    def __init__(self, session: AsyncSession, redis_client: RedisClient | None = None):
        self.session = session
        self.redis = redis_client or get_redis_client()

    async def get_health_status(self, realtime_connections: int = 0) -> HealthCheckResponse:
        db_health = await self.check_database_health()
        redis_health = await self.check_redis_health()

        if not db_health["connected"]:
            overall_status = "unhealthy"
        elif not redis_health["connected"]:
            overall_status = "degraded"
        else:
            overall_status = "healthy"

        return HealthCheckResponse(
            status=overall_status,
            version=__version__,
            checks={"database": db_health, "redis": redis_health},
            realtime_connections=realtime_connections,
        )

    async def check_database_health(self) -> Dict[str, Any]:
        try:
            start = time.perf_counter()
            result = await self.session.execute(text("SELECT 1"))
            result.scalar()
            return {
                "connected": True,
                "status": "healthy",
                "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
            }
        except Exception as e:
            return {
                "connected": False,
                "status": "unhealthy",
                "error": str(e),
                "response_time_ms": None,
            }

    async def check_redis_health(self) -> Dict[str, Any]:
        if not self.redis.is_connected:
            return {"connected": False, "status": "unavailable", "response_time_ms": None}
        try:
            start = time.perf_counter()
            await self.redis.redis.ping()
            return {
                "connected": True,
                "status": "healthy",
                "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
            }
        except Exception as e:
            return {
                "connected": False,
                "status": "unhealthy",
                "error": str(e),
                "response_time_ms": None,
            }
