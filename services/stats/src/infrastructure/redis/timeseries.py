from typing import List

from redis.asyncio import Redis
from src.domain.models import TimeSeries, TimeSeriesSample

from shared.constants import RedisKeys


class TimeSeriesRecorder:
    """Capacity-bounded FIFO of chart samples kept in a Redis list.

    Each sample is one list element holding both label and value, so the
    labels/values views can never drift out of step. Appends trim the front
    of the list back to ``capacity`` in the same transaction.
    """

    def __init__(
        self,
        redis: Redis,
        capacity: int,
        key: str = RedisKeys.TIMESERIES_ACTIVE_LIST,
    ):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.r = redis
        self.capacity = capacity
        self.key = key

    async def append(self, label: str, value: int) -> None:
        sample = TimeSeriesSample(label=label, value=value)
        pipe = self.r.pipeline(transaction=True)
        pipe.rpush(self.key, sample.model_dump_json())
        pipe.ltrim(self.key, -self.capacity, -1)
        await pipe.execute()

    async def samples(self) -> List[TimeSeriesSample]:
        raw = await self.r.lrange(self.key, 0, -1)
        return [TimeSeriesSample.model_validate_json(item) for item in raw]

    async def read(self) -> TimeSeries:
        samples = await self.samples()
        return TimeSeries(
            labels=[s.label for s in samples],
            values=[s.value for s in samples],
        )
