from datetime import datetime, timedelta, timezone

import pytest

from shared.constants import RedisKeys


@pytest.mark.asyncio
async def test_record_visit_increments_one_bucket_per_period(rollups, noon):
    await rollups.record_visit("s", noon)

    counters = await rollups.query("s")
    assert counters.daily == {"2024-03-15": 1}
    assert counters.monthly == {"2024-03": 1}
    assert counters.yearly == {"2024": 1}


@pytest.mark.asyncio
async def test_duplicate_record_counts_twice(rollups, noon):
    # No dedup key: a retried beacon is counted again
    await rollups.record_visit("s", noon)
    await rollups.record_visit("s", noon)

    counters = await rollups.query("s")
    assert counters.daily["2024-03-15"] == 2


@pytest.mark.asyncio
async def test_buckets_follow_utc_boundaries(rollups):
    late_local = datetime(2024, 12, 31, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    await rollups.record_visit("s", late_local)

    counters = await rollups.query("s")
    assert counters.daily == {"2025-01-01": 1}
    assert counters.yearly == {"2025": 1}


@pytest.mark.asyncio
async def test_daily_counters_sum_to_monthly(rollups):
    for day in (1, 1, 2, 28):
        await rollups.record_visit("s", datetime(2024, 2, day, 9, tzinfo=timezone.utc))
    await rollups.record_visit("s", datetime(2024, 3, 1, 9, tzinfo=timezone.utc))

    counters = await rollups.query("s")
    feb_days = sum(v for k, v in counters.daily.items() if k.startswith("2024-02"))
    assert feb_days == counters.monthly["2024-02"] == 4
    assert counters.monthly["2024-03"] == 1
    assert counters.yearly["2024"] == 5


@pytest.mark.asyncio
async def test_bucket_keys_come_back_in_chronological_order(rollups):
    for month in (11, 2, 9):
        await rollups.record_visit("s", datetime(2024, month, 5, tzinfo=timezone.utc))

    counters = await rollups.query("s")
    assert list(counters.monthly) == ["2024-02", "2024-09", "2024-11"]


@pytest.mark.asyncio
async def test_query_all_lists_each_site(rollups, noon, redis_client):
    await rollups.record_visit("b.com", noon)
    await rollups.record_visit("a.com", noon)

    everything = await rollups.query_all()
    assert list(everything) == ["a.com", "b.com"]
    assert await redis_client.hget(RedisKeys.rollup_key("a.com", "daily"), "2024-03-15") == "1"


@pytest.mark.asyncio
async def test_unknown_site_has_empty_counters(rollups):
    counters = await rollups.query("nobody")
    assert counters.daily == {} and counters.monthly == {} and counters.yearly == {}
