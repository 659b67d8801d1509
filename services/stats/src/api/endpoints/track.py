import json

from fastapi import APIRouter, Depends, Request
from src.api.dependencies import client_ip, get_stats_service
from src.core.logger import get_logger
from src.services.stats_service import StatsService

router = APIRouter()
logger = get_logger("api.track")


@router.post(
    "/track",
    summary="Record a page-visit beacon",
    response_description="Always acknowledged",
)
async def track_visit(
    request: Request, svc: StatsService = Depends(get_stats_service)
):
    # The beacon is fire-and-forget: any body is acknowledged, even garbage
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else {}
    except (ValueError, UnicodeDecodeError, RecursionError):
        logger.debug("beacon_body_unparseable", extra={"size": len(raw)})
        body = {}
    await svc.ingest(body, client_ip(request))
    return {"status": "ok"}
