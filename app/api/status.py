"""Detailed /status diagnostic endpoint for operational visibility."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from app.schemas.status import PairStatus, SchedulerJobInfo, StatusResponse
from app.services.market_data_store import MarketDataStore
from app.store import PairSelection, get_selection, get_store
from app.workers.scheduler import scheduler

router = APIRouter(tags=["status"])

# Track application start time for uptime calculation
_start_time: datetime = datetime.now(UTC)


@router.get("/status", response_model=StatusResponse)
async def status(
    store: MarketDataStore = Depends(get_store),
    selection: PairSelection = Depends(get_selection),
) -> StatusResponse:
    """Return detailed operational diagnostics.

    Reports store initialization, scheduler state and jobs, the pairs
    receiving ticks, and each pair's generated history footprint.
    """
    now = datetime.now(UTC)
    uptime = (now - _start_time).total_seconds()

    scheduler_status = "running" if scheduler.running else "stopped"
    jobs: list[SchedulerJobInfo] = []
    for job in scheduler.get_jobs():
        jobs.append(
            SchedulerJobInfo(
                id=job.id,
                name=job.name,
                next_run_time=job.next_run_time,
                trigger=str(job.trigger),
            )
        )

    pairs: list[PairStatus] = []
    for key in store.pair_keys:
        history = store.history(key)
        pairs.append(
            PairStatus(
                pair_key=key.value,
                history_points=len(history),
                max_span_days=store.max_span(key),
                cached_ranges=store.cached_ranges(key),
                last_timestamp=history[-1].timestamp if history else None,
            )
        )

    overall_status = "ok" if store.is_initialized else "degraded"

    return StatusResponse(
        status=overall_status,
        uptime_seconds=round(uptime, 1),
        market_data="initialized" if store.is_initialized else "uninitialized",
        scheduler=scheduler_status,
        jobs=jobs,
        selected_pairs=[key.value for key in selection.snapshot()],
        pairs=pairs,
        timestamp=now,
    )
