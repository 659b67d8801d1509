from datetime import datetime, time, timedelta

from src.core.metrics import RETENTION_RESETS_TOTAL
from src.infrastructure.redis.visit_store import VisitStore

from .base_job import PeriodicJob


def next_local_midnight(after: datetime) -> datetime:
    """First local midnight strictly after ``after`` (naive means local time)."""
    local = after.astimezone()
    tomorrow = (local + timedelta(days=1)).date()
    return datetime.combine(tomorrow, time.min).astimezone()


class RetentionResetJob(PeriodicJob):
    """Clears all raw visits at every local midnight.

    Rollups and the time series are left alone. A midnight that passes while
    the process is down is skipped; there is no catch-up run.
    """

    def __init__(self, store: VisitStore, **kwargs):
        super().__init__("stats.retention_reset", **kwargs)
        self.store = store

    def compute_next_fire_time(self, after: datetime) -> datetime:
        return next_local_midnight(after)

    async def run_once(self) -> None:
        cleared = await self.store.clear()
        RETENTION_RESETS_TOTAL.inc()
        self.logger.info("retention_reset_done", extra={"namespaces_cleared": cleared})
