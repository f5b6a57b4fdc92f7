"""
Periodic notification jobs: due-reminder sweep and weekly summary.
Run via the in-process scheduler, cron, or:
python -c "from hiretrack.app.tasks.reminders import run_reminder_sweep; print(run_reminder_sweep())"
"""
from hiretrack.app.core.exceptions import PersistenceFailure
from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.db import session as db_session
from hiretrack.app.services.reminder_service import sweep_due
from hiretrack.app.services.summary_service import send_weekly_summaries

logger = get_logger("tasks.reminders")


def run_reminder_sweep() -> dict:
    """Run the due-reminder sweep using a new DB session."""
    db = db_session.SessionLocal()
    try:
        return {"processed": sweep_due(db)}
    except PersistenceFailure as e:
        logger.error("Reminder sweep aborted: %s", e)
        return {"error": str(e), "processed": 0}
    finally:
        db.close()


def run_weekly_summary() -> dict:
    """Send weekly summaries using a new DB session."""
    db = db_session.SessionLocal()
    try:
        return {"processed": send_weekly_summaries(db)}
    finally:
        db.close()
