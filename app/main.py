"""FastAPI application entry point with lifespan management."""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from fastapi import FastAPI
from loguru import logger

from app.config import get_settings
from app.store import market_store
from app.utils.logging import setup_logging
from app.workers.scheduler import register_jobs, scheduler
from app.api.candles import router as candles_router
from app.api.chart import router as chart_router
from app.api.dashboard import router as dashboard_router
from app.api.health import router as health_router
from app.api.selection import router as selection_router
from app.api.status import router as status_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: setup on startup, teardown on shutdown."""
    settings = get_settings()

    # Configure logging first so all startup logs are formatted
    setup_logging(settings.log_level, settings.log_json, pairs=settings.log_pairs)

    # Bootstrap 7-day history for every pair before serving requests
    market_store.initialize()

    if settings.scheduler_enabled:
        scheduler.start()
        register_jobs()
    else:
        logger.info("Scheduler disabled -- live ticks only via POST /pairs/{pair}/tick")
    logger.info("Mock market data service started")

    yield

    if scheduler.running:
        scheduler.shutdown(wait=False)
    logger.info("Mock market data service stopped")


app = FastAPI(
    title="Mock Market Data",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(status_router)
app.include_router(dashboard_router)
app.include_router(candles_router)
app.include_router(chart_router)
app.include_router(selection_router)
