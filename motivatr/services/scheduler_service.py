"""APScheduler jobs (runs in-process with single uvicorn worker)."""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from motivatr.config import get_settings
from motivatr.database import AsyncSessionLocal

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def _send_due_reminders():
    """Every interval – email owners whose tasks are coming due."""
    from motivatr.services import reminder_service

    async with AsyncSessionLocal() as db:
        try:
            await reminder_service.run_sweep(db)
            await db.commit()
        except Exception as exc:
            logger.error("Reminder sweep failed: %s", exc)
            await db.rollback()


def setup_scheduler():
    """Register all jobs. Call once at app startup."""
    settings = get_settings()
    scheduler.add_job(
        _send_due_reminders,
        IntervalTrigger(seconds=settings.REMINDER_INTERVAL_SECONDS),
        id="due_reminders",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    logger.info("Scheduler jobs registered: %s", [j.id for j in scheduler.get_jobs()])
