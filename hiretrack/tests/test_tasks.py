"""Tests for the scheduled notification jobs"""
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from hiretrack.app.core.config import settings
from hiretrack.app.models.reminder import Reminder
from hiretrack.app.tasks import scheduler as scheduler_module
from hiretrack.app.tasks.reminders import run_reminder_sweep, run_weekly_summary


def test_run_reminder_sweep_opens_own_session(db_session, test_user, make_application, make_reminder, sender):
    reminder = make_reminder(make_application(test_user))

    assert run_reminder_sweep() == {"processed": 1}
    assert len(sender.sent) == 1
    db_session.expire_all()
    assert db_session.get(Reminder, reminder.id).is_sent is True


def test_run_reminder_sweep_reports_query_failure(db_session, sender):
    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT reminders", {}, Exception("no such table"))

    with patch("sqlalchemy.orm.Session.query", side_effect=broken_query):
        result = run_reminder_sweep()
    assert result["processed"] == 0
    assert "error" in result
    assert sender.attempts == []


def test_run_weekly_summary(db_session, test_user, other_user, sender):
    assert run_weekly_summary() == {"processed": 2}
    assert len(sender.sent) == 2


def test_build_scheduler_registers_jobs():
    with patch.object(settings, "reminder_sweep_interval_minutes", 5), \
         patch.object(settings, "weekly_summary_enabled", True):
        scheduler = scheduler_module.build_scheduler()
    ids = {job.id for job in scheduler.get_jobs()}
    assert ids == {scheduler_module.REMINDER_SWEEP_JOB_ID, scheduler_module.WEEKLY_SUMMARY_JOB_ID}
    sweep_job = scheduler.get_job(scheduler_module.REMINDER_SWEEP_JOB_ID)
    assert sweep_job.max_instances == 1
    assert sweep_job.coalesce is True


def test_build_scheduler_interval_zero_disables_sweep():
    with patch.object(settings, "reminder_sweep_interval_minutes", 0), \
         patch.object(settings, "weekly_summary_enabled", False):
        scheduler = scheduler_module.build_scheduler()
    assert scheduler.get_jobs() == []


def test_start_scheduler_respects_disabled_flag():
    with patch.object(settings, "scheduler_enabled", False):
        assert scheduler_module.start_scheduler() is None
    scheduler_module.stop_scheduler(None)
