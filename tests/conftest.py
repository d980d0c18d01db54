# tests/conftest.py
import asyncio
import random

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import InternalError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from tarot_api.core.config import settings
from tarot_api.core.startup import startup_event
from tarot_api.data.tarot import load_tarot_data
from tarot_api.models.tarot_models import CardSchema
from tarot_api.services.cache_services import CacheAsideRepository


class FakeRedis:
    """Dict-backed stand-in for redis.asyncio.Redis with call counters."""

    def __init__(self, fail=False):
        self.store = {}
        self.ttls = {}
        self.get_calls = 0
        self.set_calls = 0
        self.fail = fail

    async def get(self, key):
        self.get_calls += 1
        if self.fail:
            raise RedisConnectionError("redis is down")
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.set_calls += 1
        if self.fail:
            raise RedisConnectionError("redis is down")
        self.store[key] = value
        self.ttls[key] = ex
        return True

    def clear(self):
        self.store.clear()
        self.ttls.clear()


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


@pytest.fixture
def cache(fake_redis, fake_sleep):
    return CacheAsideRepository(fake_redis, sleep=fake_sleep)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def deck():
    """The 22 Major Arcana as schemas, ids 1..22 in arcana order."""
    rows = load_tarot_data(settings.DECK_DATA_PATH)
    return [CardSchema(id=index + 1, **row) for index, row in enumerate(rows)]


@pytest.fixture
def session_factory(tmp_path):
    """Seeded SQLite database; NullPool so every asyncio.run gets fresh connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'tarot.sqlite3'}", poolclass=NullPool)
    factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(startup_event(bind=engine, session_factory=factory))
    return factory


class AbortOnceSession:
    """
    Wraps an AsyncSession so the first statement fails and every later one
    fails too until rollback, the way PostgreSQL treats an aborted transaction.
    """

    def __init__(self, session):
        self._session = session
        self.statements = 0
        self.rollbacks = 0
        self.aborted = False

    async def execute(self, *args, **kwargs):
        self.statements += 1
        if self.statements == 1:
            self.aborted = True
            raise OperationalError("SELECT 1", {}, Exception("server closed the connection unexpectedly"))
        if self.aborted:
            raise InternalError("SELECT 1", {}, Exception("current transaction is aborted"))
        return await self._session.execute(*args, **kwargs)

    async def rollback(self):
        self.rollbacks += 1
        self.aborted = False
        await self._session.rollback()

    def __getattr__(self, name):
        return getattr(self._session, name)


@pytest.fixture
def abort_once():
    return AbortOnceSession
