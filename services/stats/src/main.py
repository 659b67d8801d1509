import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_fastapi_instrumentator import Instrumentator
from src.api.router import api_router, ops_router
from src.core.config import settings
from src.core.logger import get_logger
from src.infrastructure.redis.client import connect_with_retry
from src.startup import build_jobs, build_stats_service, initialize_application

initialize_application()
logger = get_logger("stats.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("stats_service_starting")
    app.state.redis = await connect_with_retry()
    app.state.stats = build_stats_service(app.state.redis)
    app.state.jobs = build_jobs(app.state.stats)
    app.state.ready_event = asyncio.Event()
    for job in app.state.jobs:
        job.start()
    app.state.ready_event.set()
    try:
        yield
    finally:
        logger.info("stats_service_stopping")
        for job in app.state.jobs:
            await job.stop()
        await app.state.redis.aclose()


app = FastAPI(title="Pixel Stats", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    excluded_handlers=["/docs", "/openapi.json", "/metrics"],
).instrument(app)

app.include_router(ops_router)
app.include_router(api_router)


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
