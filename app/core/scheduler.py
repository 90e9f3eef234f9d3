import logging
import os
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from app.core.config import settings
from app.core.database import SessionLocal
from app.services.portfolio import portfolio_service

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def generate_daily_snapshots():
    db = SessionLocal()
    try:
        snapshot_count = portfolio_service.create_daily_snapshots(db)
        logger.info(f"Daily portfolio snapshots generated: {snapshot_count} snapshots created")
    except Exception as e:
        logger.error(f"Error generating daily portfolio snapshots: {e}", exc_info=True)
    finally:
        db.close()


def start_scheduler():
    if os.getenv("TESTING") == "true" or not settings.SNAPSHOT_SCHEDULER_ENABLED:
        logger.info("Snapshot scheduler disabled")
        return

    if not scheduler.running:
        scheduler.add_job(
            generate_daily_snapshots,
            'cron',
            hour=settings.SNAPSHOT_CRON_HOUR,
            minute=settings.SNAPSHOT_CRON_MINUTE,
            id='daily_portfolio_snapshots',
            name='Generate Daily Portfolio Snapshots',
            replace_existing=True
        )
        scheduler.start()
        logger.info("Scheduler started with daily portfolio snapshot job")


def stop_scheduler():
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler stopped")
