from fastapi import APIRouter, Depends
from src.api.dependencies import get_stats_service
from src.domain.models import TimeSeries, TimeSeriesSample
from src.services.stats_service import StatsService

router = APIRouter(prefix="/timeseries")


@router.get("", response_model=TimeSeries)
async def read_series(svc: StatsService = Depends(get_stats_service)):
    return await svc.read_timeseries()


@router.post("", response_model=TimeSeries)
async def append_sample(
    sample: TimeSeriesSample, svc: StatsService = Depends(get_stats_service)
):
    return await svc.append_sample(sample.label, sample.value)
