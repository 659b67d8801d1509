from datetime import datetime
from typing import Dict

from redis.asyncio import Redis
from src.domain.models import RollupCounters
from src.metrics.bucketing import calendar_buckets

from shared.constants import RedisKeys


class RollupRepository:
    """Daily/monthly/yearly visit counters, one Redis hash per site and period.

    Counters only ever grow: each recorded visit increments one bucket per
    period with HINCRBY. There is no dedup key, so recording the same visit
    twice counts it twice.
    """

    def __init__(self, redis: Redis):
        self.r = redis

    async def record_visit(self, site: str, at: datetime) -> None:
        pipe = self.r.pipeline(transaction=True)
        for period, bucket in calendar_buckets(at).items():
            pipe.hincrby(RedisKeys.rollup_key(site, period), bucket, 1)
        pipe.sadd(RedisKeys.ROLLUP_SITE_INDEX, site)
        await pipe.execute()

    async def query(self, site: str) -> RollupCounters:
        pipe = self.r.pipeline(transaction=True)
        for period in RedisKeys.ROLLUP_PERIODS:
            pipe.hgetall(RedisKeys.rollup_key(site, period))
        hashes = await pipe.execute()
        return RollupCounters(
            **{
                period: self._convert_counts(data)
                for period, data in zip(RedisKeys.ROLLUP_PERIODS, hashes)
            }
        )

    async def query_all(self) -> Dict[str, RollupCounters]:
        sites = sorted(await self.r.smembers(RedisKeys.ROLLUP_SITE_INDEX))
        return {site: await self.query(site) for site in sites}

    def _convert_counts(self, data: Dict[str, str]) -> Dict[str, int]:
        # Zero-padded bucket keys sort chronologically as plain strings
        return {bucket: int(data[bucket]) for bucket in sorted(data)}
