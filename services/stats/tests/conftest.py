from datetime import datetime, timezone

import fakeredis
import fakeredis.aioredis
import httpx
import pytest
from src.api.dependencies import get_stats_service
from src.infrastructure.redis.locks import NamespaceLocks
from src.infrastructure.redis.rollups import RollupRepository
from src.infrastructure.redis.timeseries import TimeSeriesRecorder
from src.infrastructure.redis.visit_store import VisitStore
from src.main import app
from src.services.stats_service import StatsService

# 2024-03-15 12:00:00 UTC
NOON_MS = 1710504000000


@pytest.fixture
def redis_client():
    """Async fake Redis with its own server so tests never share keys."""
    return fakeredis.aioredis.FakeRedis(
        server=fakeredis.FakeServer(), decode_responses=True
    )


@pytest.fixture
def visit_store(redis_client):
    return VisitStore(redis_client, NamespaceLocks())


@pytest.fixture
def rollups(redis_client):
    return RollupRepository(redis_client)


@pytest.fixture
def recorder(redis_client):
    return TimeSeriesRecorder(redis_client, capacity=144)


@pytest.fixture
def stats_service(visit_store, rollups, recorder):
    return StatsService(
        store=visit_store,
        rollups=rollups,
        timeseries=recorder,
        active_window_seconds=300,
        recent_window_days=7,
        unknown_site="unknown",
    )


@pytest.fixture
def noon():
    return datetime.fromtimestamp(NOON_MS / 1000, tz=timezone.utc)


@pytest.fixture
def api_client(stats_service):
    """Factory for an httpx client talking to the app in-process.

    Lifespan does not run, so the real Redis connection and background jobs
    are never touched.
    """
    app.dependency_overrides[get_stats_service] = lambda: stats_service

    def _make() -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    yield _make
    app.dependency_overrides.clear()
