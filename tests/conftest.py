"""Shared pytest fixtures: SQLite in-memory database, app and HTTP client."""

import logging
import os
import tempfile

# Must be set before the app modules build their settings and engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "notecollab-test-logs"))
os.environ["NOTECOLLAB_SKIP_LIFESPAN_DB"] = "1"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notecollab.core.models import Group, GroupMember, Tag, User  # noqa: E402
from notecollab.core.models.base import BaseModel  # noqa: E402
from notecollab.core.redis_client import RedisClient  # noqa: E402
from notecollab.database import get_db_session  # noqa: E402
from notecollab.main import create_app  # noqa: E402
from notecollab.security.jwt import create_access_token  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@pytest.fixture
async def test_engine():
    """Fresh SQLite in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite only enforces foreign keys (and ON DELETE actions) when asked
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_app(session_factory):
    """App wired to the test database. Lifespan (Redis, create_all) is not run."""
    app = create_app()

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user id."""

    def _headers(user_id):
        token = create_access_token({"sub": str(user_id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_user(test_session):
    async def _make(username: str) -> User:
        user = User(username=username, full_name=username.title(), is_active=True)
        test_session.add(user)
        await test_session.commit()
        await test_session.refresh(user)
        return user

    return _make


@pytest.fixture
async def owner(make_user):
    return await make_user("alice")


@pytest.fixture
async def collaborator(make_user):
    return await make_user("bob")


@pytest.fixture
async def outsider(make_user):
    return await make_user("carol")


@pytest.fixture
async def team(test_session, owner, collaborator):
    """Group owned by alice with bob as a member."""
    group = Group(name="Editors", description="", owner_id=owner.id)
    test_session.add(group)
    await test_session.commit()
    test_session.add(GroupMember(group_id=group.id, user_id=collaborator.id, role="MEMBER"))
    await test_session.commit()
    return group


@pytest.fixture
async def tag(test_session, owner):
    tag = Tag(name="work", color="#3b82f6", owner_id=owner.id)
    test_session.add(tag)
    await test_session.commit()
    await test_session.refresh(tag)
    return tag


class FakeRedisBackend:
    """Dict-backed stand-in for ``redis.asyncio.Redis``."""

    def __init__(self):
        self.storage = {}
        self.ttls = {}

    async def get(self, key):
        return self.storage.get(key)

    async def set(self, key, value):
        self.storage[key] = value
        return True

    async def setex(self, key, ttl, value):
        self.storage[key] = value
        self.ttls[key] = ttl
        return True

    async def incr(self, key):
        value = int(self.storage.get(key, 0)) + 1
        self.storage[key] = str(value)
        return value

    async def delete(self, key):
        return 1 if self.storage.pop(key, None) is not None else 0

    async def ping(self):
        return True

    async def aclose(self):
        pass


@pytest.fixture
def fake_redis():
    """A real RedisClient talking to an in-memory backend."""
    client = RedisClient()
    client.redis = FakeRedisBackend()
    return client


@pytest.fixture
def offline_redis():
    """A RedisClient that never connected; every call is a no-op."""
    return RedisClient()


class FakeWebSocket:
    """Records frames sent through ``send_json``."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)

    def events(self):
        return [frame["event"] for frame in self.sent]


@pytest.fixture
def fake_websocket():
    return FakeWebSocket
