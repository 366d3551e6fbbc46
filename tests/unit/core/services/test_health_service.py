import pytest

from notecollab.core.redis_client import RedisClient
from notecollab.core.services.health_service import HealthService


class FakeScalarResult:
    def __init__(self, scalar_value):
        self._scalar_value = scalar_value

    def scalar(self):
        return self._scalar_value


class FakeSession:
    def __init__(self, ok=True):
        self.ok = ok
        self.executed = []

    async def execute(self, stmt):
        self.executed.append(stmt)
        if self.ok:
            return FakeScalarResult(1)
        raise RuntimeError("db down")


class DummyRedis:
    def __init__(self, ok=True):
        self.ok = ok
        self.pings = 0

    async def ping(self):
        self.pings += 1
        if not self.ok:
            raise RuntimeError("redis down")
        return True


def redis_client(backend=None):
    client = RedisClient()
    client.redis = backend
    return client


async def test_get_health_status_all_ok():
    svc = HealthService(FakeSession(ok=True), redis_client(DummyRedis(ok=True)))

    resp = await svc.get_health_status(realtime_connections=3)
    assert resp.status == "healthy"
    assert resp.checks["database"]["connected"] is True
    assert resp.checks["redis"]["connected"] is True
    assert resp.realtime_connections == 3


async def test_get_health_status_db_down():
    svc = HealthService(FakeSession(ok=False), redis_client(DummyRedis(ok=True)))

    resp = await svc.get_health_status()
    assert resp.status == "unhealthy"
    assert resp.checks["database"]["connected"] is False
    assert resp.checks["database"]["error"] == "db down"
    assert resp.checks["redis"]["connected"] is True


async def test_get_health_status_redis_down_is_degraded():
    svc = HealthService(FakeSession(ok=True), redis_client(DummyRedis(ok=False)))

    resp = await svc.get_health_status()
    assert resp.status == "degraded"
    assert resp.checks["redis"]["status"] == "unhealthy"


async def test_redis_never_connected():
    svc = HealthService(FakeSession(ok=True), redis_client())

    check = await svc.check_redis_health()
    assert check == {"connected": False, "status": "unavailable", "response_time_ms": None}


async def test_database_check_runs_a_query():
    session = FakeSession(ok=True)
    svc = HealthService(session, redis_client())

    check = await svc.check_database_health()
    assert check["connected"] is True
    assert check["response_time_ms"] >= 0
    assert len(session.executed) == 1


@pytest.mark.parametrize("ok, expected", [(True, "healthy"), (False, "unhealthy")])
async def test_redis_ping(ok, expected):
    backend = DummyRedis(ok=ok)
    svc = HealthService(FakeSession(), redis_client(backend))

    check = await svc.check_redis_health()
    assert check["status"] == expected
    assert backend.pings == 1
