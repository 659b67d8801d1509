from fastapi import APIRouter, Depends, HTTPException
from src.api.dependencies import get_stats_service
from src.domain.errors import StatsError
from src.domain.models import MergeRequest, MergeResult, SiteSummary
from src.services.stats_service import StatsService

router = APIRouter(prefix="/sites")


@router.get("", response_model=list[SiteSummary])
async def list_sites(svc: StatsService = Depends(get_stats_service)):
    """Total, active and last-visit figures per site."""
    return await svc.site_summaries()


@router.post("/merge", response_model=MergeResult)
async def merge_sites(
    req: MergeRequest, svc: StatsService = Depends(get_stats_service)
):
    try:
        return await svc.merge_sites(req.a, req.b, req.into)
    except StatsError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
