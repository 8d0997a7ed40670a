"""Status endpoint response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SchedulerJobInfo(BaseModel):
    """Information about a single APScheduler job."""

    id: str
    name: str
    next_run_time: Optional[datetime] = None
    trigger: str


class PairStatus(BaseModel):
    """Generated-data footprint for one pair."""

    pair_key: str
    history_points: int
    max_span_days: int
    cached_ranges: list[str]
    last_timestamp: Optional[int] = None


class StatusResponse(BaseModel):
    """Response model for the /status diagnostic endpoint."""

    status: str  # "ok" or "degraded"
    uptime_seconds: float
    market_data: str  # "initialized" or "uninitialized"
    scheduler: str  # "running" or "stopped"
    jobs: list[SchedulerJobInfo]
    selected_pairs: list[str]
    pairs: list[PairStatus]
    timestamp: datetime
