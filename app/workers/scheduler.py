"""APScheduler setup for background task scheduling.

Uses AsyncIOScheduler with in-memory job store. The live tick job is
registered via register_jobs() called from the application lifespan.
"""

from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from app.config import get_settings
from app.workers.jobs import tick_selected_pairs

scheduler = AsyncIOScheduler(
    jobstores={
        "default": MemoryJobStore(),
    },
    job_defaults={
        "coalesce": True,
        "misfire_grace_time": 30,
        "max_instances": 1,
    },
    timezone="UTC",
)


def register_jobs() -> None:
    """Register the live tick job on a fixed interval.

    Missed runs are coalesced into one so a stalled loop never replays a
    burst of ticks with identical timestamps.
    """
    settings = get_settings()

    scheduler.add_job(
        tick_selected_pairs,
        trigger=IntervalTrigger(seconds=settings.tick_interval_seconds),
        id="tick_selected_pairs",
        name="Append live ticks for selected pairs",
        replace_existing=True,
    )
    logger.info(
        "Registered job: tick_selected_pairs (every {seconds} seconds)",
        seconds=settings.tick_interval_seconds,
    )
