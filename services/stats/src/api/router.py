from fastapi import APIRouter

from .endpoints import health, sites, stats, timeseries, track

api_router = APIRouter(prefix="/api")
api_router.include_router(track.router)
api_router.include_router(sites.router)
api_router.include_router(stats.router)
api_router.include_router(timeseries.router)

ops_router = APIRouter()
ops_router.include_router(health.router)
