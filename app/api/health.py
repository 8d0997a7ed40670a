"""Health check endpoint reporting market data initialization."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from loguru import logger

from app.schemas.health import HealthResponse
from app.services.market_data_store import MarketDataStore
from app.store import get_store

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(
    store: MarketDataStore = Depends(get_store),
) -> HealthResponse:
    """Check application health.

    Returns status "ok" once the market data store has been initialized,
    "degraded" before that. Always 200 so liveness probes pass while the
    store bootstraps.
    """
    if store.is_initialized:
        return HealthResponse(
            status="ok",
            market_data="initialized",
            timestamp=datetime.now(UTC),
        )

    logger.warning("Health check -- market data store not initialized")
    return HealthResponse(
        status="degraded",
        market_data="uninitialized",
        timestamp=datetime.now(UTC),
    )
