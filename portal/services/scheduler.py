# portal/services/scheduler.py
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI

from portal.core.config import settings
from portal.services.sessions import SessionManager

logger = logging.getLogger(__name__)

scheduler: Optional[AsyncIOScheduler] = None


@asynccontextmanager
async def lifespan_scheduler(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan: start / stop APScheduler and close every session's
    upstream client on shutdown.
    """
    global scheduler
    sessions: SessionManager = app.state.sessions
    scheduler = AsyncIOScheduler(timezone="UTC")
    scheduler.add_job(
        run_cleanup_job,
        IntervalTrigger(minutes=settings.SESSION_CLEANUP_MINUTES),
        args=[sessions],
    )
    scheduler.start()
    logger.info("APScheduler started: idle session cleanup every %s minutes", settings.SESSION_CLEANUP_MINUTES)
    try:
        yield
    finally:
        if scheduler:
            scheduler.shutdown(wait=False)
            logger.info("APScheduler shutdown")
        await sessions.close_all()


async def run_cleanup_job(sessions: SessionManager) -> int:
    """Scheduled job: drop sessions nobody has used for a while."""
    try:
        purged = await sessions.purge_idle()
        removed = sessions.purge_credential_files()
    except Exception as e:
        logger.exception("Idle session cleanup failed: %s", e)
        return 0
    if purged or removed:
        logger.info("Idle session cleanup done: %s closed, %s credential files removed", purged, removed)
    return purged
