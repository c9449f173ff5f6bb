"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
# In-memory SQLite; integration tests install their own engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DATABASE_SSL_MODE", "disable")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-characters")
# Cheap Argon2 parameters keep hashing fast in tests
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "8192")
# Emails must never leave the test process
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("REDIS_URL", None)

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator, Generator

import pytest
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis

from src.taskflow.core import redis as redis_core
from src.taskflow.core.config import get_settings
from src.taskflow.core.sessions import get_session_store

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_session_store() -> Generator[None]:
    """Sessions held in process memory must not leak between tests."""
    get_session_store().clear_local()
    yield
    get_session_store().clear_local()


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing.

    Returns an in-memory Redis implementation that behaves like
    a real Redis server but doesn't require external dependencies.
    """
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return fakeredis client.

    Patches every module that imports get_redis so the session store and
    the health check both see the fake.
    """
    redis_core.reset_redis_state()

    async def _get_fake_redis() -> Redis:
        return fake_redis

    monkeypatch.setattr("src.taskflow.core.redis.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.taskflow.core.sessions.get_redis", _get_fake_redis)
    yield fake_redis
    redis_core.reset_redis_state()


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (simulates Redis unavailable)."""
    redis_core.reset_redis_state()

    async def _get_none() -> None:
        return None

    monkeypatch.setattr("src.taskflow.core.redis.get_redis", _get_none)
    monkeypatch.setattr("src.taskflow.core.sessions.get_redis", _get_none)
    yield
    redis_core.reset_redis_state()
