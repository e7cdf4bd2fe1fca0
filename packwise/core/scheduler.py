"""Background job scheduler for flushing vault snapshots."""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlmodel import Session

from packwise.checklist.persistence import snapshot_writer
from packwise.core.config import settings
from packwise.core.database import engine

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def autosave_job():
    """Background autosave job."""
    try:
        with Session(engine) as session:
            written = snapshot_writer.flush(session)
            if written:
                logger.debug(f"Background autosave wrote {written} documents")
    except Exception as e:
        logger.error(f"Background autosave failed: {e}")


def start_scheduler():
    """Start the background scheduler."""
    scheduler.add_job(
        autosave_job,
        trigger=IntervalTrigger(seconds=settings.autosave_interval_seconds),
        id="vault_autosave",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Scheduler started, autosaving every {settings.autosave_interval_seconds} seconds"
    )


def shutdown_scheduler():
    """Graceful shutdown, writing anything still pending."""
    scheduler.shutdown(wait=False)
    autosave_job()
    logger.info("Scheduler shut down")
