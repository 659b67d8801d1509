from datetime import datetime, timedelta

from src.core.metrics import ACTIVE_VISITORS, TIMESERIES_SAMPLES_TOTAL
from src.services.stats_service import StatsService

from .base_job import PeriodicJob


class ActiveVisitorSampler(PeriodicJob):
    """Appends the total active visitor count to the chart series on a cadence.

    Labels are local wall-clock times formatted with ``label_format``.
    """

    def __init__(
        self,
        service: StatsService,
        interval_seconds: int,
        label_format: str = "%H:%M",
        **kwargs,
    ):
        super().__init__("stats.active_sampler", **kwargs)
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.service = service
        self.interval = timedelta(seconds=interval_seconds)
        self.label_format = label_format

    def compute_next_fire_time(self, after: datetime) -> datetime:
        return after + self.interval

    async def run_once(self) -> None:
        await self.sample(self._clock())

    async def sample(self, at: datetime) -> int:
        now_ms = int(at.timestamp() * 1000)
        active = await self.service.active_total(now_ms)
        label = at.astimezone().strftime(self.label_format)
        await self.service.timeseries.append(label, active)
        ACTIVE_VISITORS.set(active)
        TIMESERIES_SAMPLES_TOTAL.inc()
        self.logger.debug("active_sampled", extra={"label": label, "value": active})
        return active
