import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from src.jobs.active_sampler import ActiveVisitorSampler


@pytest.mark.asyncio
async def test_sample_appends_total_active_visitors(stats_service, noon):
    await stats_service.ingest({"site": "a.com"}, None, at=noon - timedelta(minutes=1))
    await stats_service.ingest({"site": "b.com"}, None, at=noon - timedelta(minutes=2))
    await stats_service.ingest({"site": "b.com"}, None, at=noon - timedelta(hours=1))

    sampler = ActiveVisitorSampler(stats_service, interval_seconds=600)
    value = await sampler.sample(noon)

    assert value == 2
    series = await stats_service.read_timeseries()
    assert series.values == [2]
    assert series.labels == [noon.astimezone().strftime("%H:%M")]


@pytest.mark.asyncio
async def test_sample_with_no_visits_records_zero(stats_service, noon):
    sampler = ActiveVisitorSampler(stats_service, 600, label_format="%H:%M:%S")
    assert await sampler.sample(noon) == 0
    assert (await stats_service.read_timeseries()).labels == [
        noon.astimezone().strftime("%H:%M:%S")
    ]


def test_next_fire_time_is_one_interval_later(stats_service):
    sampler = ActiveVisitorSampler(stats_service, interval_seconds=600)
    start = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert sampler.compute_next_fire_time(start) == start + timedelta(minutes=10)


def test_interval_must_be_positive(stats_service):
    with pytest.raises(ValueError):
        ActiveVisitorSampler(stats_service, interval_seconds=0)


@pytest.mark.asyncio
async def test_loop_samples_every_interval(stats_service, noon):
    now = {"t": noon}
    park = asyncio.Event()
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)
        if len(delays) > 3:
            await park.wait()
        now["t"] = sampler.next_fire_time

    sampler = ActiveVisitorSampler(
        stats_service, 600, clock=lambda: now["t"], sleep=fake_sleep
    )
    sampler.start()

    async def _three_samples():
        while len((await stats_service.read_timeseries()).values) < 3:
            await asyncio.sleep(0)

    await asyncio.wait_for(_three_samples(), timeout=1)
    await sampler.stop()

    assert delays[:3] == [600.0, 600.0, 600.0]
