"""
In-process scheduler for the notification jobs (APScheduler, background thread).
Disabled with SCHEDULER_ENABLED=false when an external cron drives the tasks.
"""
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from hiretrack.app.core.config import settings
from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.tasks.reminders import run_reminder_sweep, run_weekly_summary

logger = get_logger("tasks.scheduler")

REMINDER_SWEEP_JOB_ID = "reminder_sweep"
WEEKLY_SUMMARY_JOB_ID = "weekly_summary"


def build_scheduler() -> BackgroundScheduler:
    scheduler = BackgroundScheduler(timezone="UTC")
    if settings.reminder_sweep_interval_minutes > 0:
        scheduler.add_job(
            run_reminder_sweep,
            IntervalTrigger(minutes=settings.reminder_sweep_interval_minutes),
            id=REMINDER_SWEEP_JOB_ID,
            # One sweep at a time; a late run is merged rather than stacked
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
    if settings.weekly_summary_enabled:
        scheduler.add_job(
            run_weekly_summary,
            CronTrigger(day_of_week=settings.weekly_summary_day, hour=settings.weekly_summary_hour),
            id=WEEKLY_SUMMARY_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
    return scheduler


def start_scheduler() -> BackgroundScheduler | None:
    if not settings.scheduler_enabled:
        logger.info("Scheduler disabled")
        return None
    scheduler = build_scheduler()
    scheduler.start()
    logger.info(
        "Scheduler started jobs=%s",
        [job.id for job in scheduler.get_jobs()],
    )
    return scheduler


def stop_scheduler(scheduler: BackgroundScheduler | None) -> None:
    if scheduler is not None and scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
