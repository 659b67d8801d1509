import time

from fastapi import APIRouter, Depends, Request, Response
from src.api.dependencies import get_stats_service
from src.core.logger import get_logger
from src.services.stats_service import StatsService

router = APIRouter()
logger = get_logger("api.health")
_started_at = time.monotonic()


@router.get("/healthz")
async def healthz(request: Request, svc: StatsService = Depends(get_stats_service)):
    """Redis liveness plus how many site namespaces currently hold visits."""
    try:
        await request.app.state.redis.ping()
        sites = await svc.store.sites()
    except Exception as exc:
        logger.warning("health_check_failed", extra={"error": str(exc)})
        return Response(status_code=503, content=str(exc))
    return {
        "status": "ok",
        "redis": True,
        "sites": len(sites),
        "uptime_s": round(time.monotonic() - _started_at, 3),
    }


@router.get("/readyz")
async def readyz(request: Request):
    if not request.app.state.ready_event.is_set():
        return Response(status_code=503, content="not ready")
    jobs = getattr(request.app.state, "jobs", [])
    return {"status": "ready", "jobs": sorted(job.name for job in jobs if job.running)}
