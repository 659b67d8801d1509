from redis.asyncio import Redis
from src.core.config import settings
from src.core.logger import configure_logging, get_logger
from src.infrastructure.redis.locks import NamespaceLocks
from src.infrastructure.redis.rollups import RollupRepository
from src.infrastructure.redis.timeseries import TimeSeriesRecorder
from src.infrastructure.redis.visit_store import VisitStore
from src.jobs.active_sampler import ActiveVisitorSampler
from src.jobs.base_job import PeriodicJob
from src.jobs.retention_reset import RetentionResetJob
from src.services.stats_service import StatsService

from shared.constants import Environment

logger = get_logger("startup")


def build_stats_service(redis: Redis) -> StatsService:
    store = VisitStore(redis, NamespaceLocks())
    return StatsService(
        store=store,
        rollups=RollupRepository(redis),
        timeseries=TimeSeriesRecorder(redis, settings.timeseries_capacity),
        active_window_seconds=settings.active_window_seconds,
        recent_window_days=settings.recent_window_days,
        unknown_site=settings.unknown_site,
    )


def build_jobs(service: StatsService) -> list[PeriodicJob]:
    """Background jobs enabled for this environment."""
    if Environment.is_testing(settings.app_environment):
        logger.info("background_jobs_disabled", extra={"reason": "testing"})
        return []
    jobs: list[PeriodicJob] = []
    if settings.retention_enabled:
        jobs.append(RetentionResetJob(service.store))
    if settings.sampler_enabled:
        jobs.append(
            ActiveVisitorSampler(
                service,
                settings.timeseries_sample_interval_seconds,
                settings.timeseries_label_format,
            )
        )
    return jobs


def initialize_application():
    configure_logging()
    logger.info(
        "stats_service_initializing",
        extra={
            "otel_service": settings.otel_service_name,
            "environment": settings.app_environment,
            "timeseries_capacity": settings.timeseries_capacity,
        },
    )
