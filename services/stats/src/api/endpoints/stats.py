from typing import Dict

from fastapi import APIRouter, Depends
from src.api.dependencies import get_stats_service
from src.domain.models import RollupCounters
from src.services.stats_service import StatsService

router = APIRouter(prefix="/stats")


@router.get("/weekly")
async def weekly(svc: StatsService = Depends(get_stats_service)) -> Dict[str, int]:
    return await svc.recent_counts()


@router.get("/rollups", response_model=Dict[str, RollupCounters])
async def all_rollups(svc: StatsService = Depends(get_stats_service)):
    return await svc.all_rollups()


@router.get("/rollups/{site}", response_model=RollupCounters)
async def site_rollups(site: str, svc: StatsService = Depends(get_stats_service)):
    return await svc.rollup(site)
