"""
Periodic maintenance jobs.

The only recurring job is the rate-limit sweep, which drops expired
in-memory windows so the counter map does not grow without bound.
"""
import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from skillbridge.core.config import settings
from skillbridge.core.rate_limit import get_rate_limit_store

logger = logging.getLogger(__name__)

scheduler: Optional[AsyncIOScheduler] = None


async def sweep_rate_limit_windows() -> int:
    """Background task removing expired rate-limit windows"""
    try:
        removed = await get_rate_limit_store().sweep()
        if removed:
            logger.info(f"Swept {removed} expired rate-limit windows")
        return removed
    except Exception as e:
        logger.error(f"Error sweeping rate-limit windows: {e}", exc_info=True)
        return 0


def start_scheduler() -> AsyncIOScheduler:
    """Start the job scheduler; must be called with a running event loop"""
    global scheduler
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        sweep_rate_limit_windows,
        trigger=IntervalTrigger(seconds=settings.RATE_LIMIT_SWEEP_SECONDS),
        id="sweep_rate_limit_windows",
        name="Sweep expired rate-limit windows",
        replace_existing=True,
        max_instances=1,
    )
    scheduler.start()
    logger.info(f"Scheduler started (rate-limit sweep every {settings.RATE_LIMIT_SWEEP_SECONDS}s)")
    return scheduler


def stop_scheduler() -> None:
    global scheduler
    if scheduler is not None and scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
    scheduler = None
