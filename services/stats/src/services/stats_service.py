import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from src.core.logger import get_logger
from src.core.metrics import INGEST_LATENCY_SECONDS, VISITS_INGESTED_TOTAL
from src.domain.models import (
    BeaconPayload,
    MergeResult,
    RollupCounters,
    SiteSummary,
    TimeSeries,
    VisitEvent,
)
from src.infrastructure.redis.rollups import RollupRepository
from src.infrastructure.redis.timeseries import TimeSeriesRecorder
from src.infrastructure.redis.visit_store import VisitStore
from src.metrics import aggregator
from src.services.site_merge import SiteMergeOperator

logger = get_logger("stats.service")

# Set by the server, never taken from the beacon body
_SERVER_FIELDS = ("site", "ip", "timestamp")

# Bodies nested deeper than this are stored as empty beacons
MAX_BODY_DEPTH = 32


def _now_ms() -> int:
    return int(time.time() * 1000)


def _storable(value: Any, depth: int = 0) -> Any:
    """Copy a parsed body so that anything JSON could decode can be encoded.

    Lone surrogates (legal in JSON escapes, illegal in UTF-8) become U+FFFD.
    Raises ValueError past MAX_BODY_DEPTH.
    """
    if depth > MAX_BODY_DEPTH:
        raise ValueError("beacon body nested too deeply")
    if isinstance(value, str):
        return value.encode("utf-8", "surrogatepass").decode("utf-8", "replace")
    if isinstance(value, Mapping):
        return {
            _storable(str(k), depth): _storable(v, depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_storable(v, depth + 1) for v in value]
    return value


class StatsService:
    """Entry point for ingestion and every dashboard query.

    Wires the visit store, rollup repository, time-series recorder and merge
    operator together; the API layer talks only to this class.
    """

    def __init__(
        self,
        store: VisitStore,
        rollups: RollupRepository,
        timeseries: TimeSeriesRecorder,
        active_window_seconds: int = 300,
        recent_window_days: int = 7,
        unknown_site: str = "unknown",
    ):
        self.store = store
        self.rollups = rollups
        self.timeseries = timeseries
        self.merger = SiteMergeOperator(store)
        self.active_window_ms = active_window_seconds * 1000
        self.recent_window_ms = recent_window_days * 24 * 60 * 60 * 1000
        self.unknown_site = unknown_site

    # Ingestion
    def resolve_site(self, raw_site: Any) -> str:
        if raw_site is None or raw_site == "":
            return self.unknown_site
        return raw_site if isinstance(raw_site, str) else str(raw_site)

    async def ingest(
        self,
        body: Mapping[str, Any] | None,
        ip: str | None,
        at: datetime | None = None,
    ) -> VisitEvent:
        """Store one beacon and bump its rollups, whatever its shape.

        ``at`` defaults to the current UTC instant and stamps both the stored
        event and its rollup buckets.
        """
        started = time.perf_counter()
        at = at or datetime.now(timezone.utc)
        try:
            body = _storable(body) if isinstance(body, Mapping) else {}
        except ValueError:
            logger.debug("beacon_body_too_deep")
            body = {}
        payload = BeaconPayload.model_validate(body)

        fields = payload.model_dump(by_alias=True, exclude={"site"})
        for name in _SERVER_FIELDS:
            fields.pop(name, None)
        fields["ip"] = ip
        fields["timestamp"] = int(at.timestamp() * 1000)

        site = self.resolve_site(payload.site)
        event = await self.store.append(site, fields)
        await self.rollups.record_visit(site, at)

        VISITS_INGESTED_TOTAL.inc()
        INGEST_LATENCY_SECONDS.observe(time.perf_counter() - started)
        logger.debug("visit_ingested", extra={"site": site, "page": str(event.page)})
        return event

    # Live statistics
    async def site_summaries(self, now_ms: int | None = None) -> List[SiteSummary]:
        namespaces = await self.store.snapshot()
        now_ms = _now_ms() if now_ms is None else now_ms
        return aggregator.summarize(namespaces, now_ms, self.active_window_ms)

    async def recent_counts(self, now_ms: int | None = None) -> Dict[str, int]:
        namespaces = await self.store.snapshot()
        now_ms = _now_ms() if now_ms is None else now_ms
        return aggregator.count_recent(namespaces, now_ms, self.recent_window_ms)

    async def active_total(self, now_ms: int | None = None) -> int:
        return aggregator.total_active(await self.site_summaries(now_ms))

    # Rollups
    async def rollup(self, site: str) -> RollupCounters:
        return await self.rollups.query(site)

    async def all_rollups(self) -> Dict[str, RollupCounters]:
        return await self.rollups.query_all()

    # Time series
    async def read_timeseries(self) -> TimeSeries:
        return await self.timeseries.read()

    async def append_sample(self, label: str, value: int) -> TimeSeries:
        await self.timeseries.append(label, value)
        return await self.timeseries.read()

    # Merge
    async def merge_sites(
        self, a: str | None, b: str | None, into: str | None
    ) -> MergeResult:
        return await self.merger.merge(a, b, into)
