"""Tests for the due-reminder sweep (reminder_service.sweep_due)"""
from datetime import timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from hiretrack.app.core.exceptions import PersistenceFailure
from hiretrack.app.models.reminder import Reminder
from hiretrack.app.services.reminder_service import create_reminder, sweep_due
from hiretrack.app.utils.dates import utcnow
from hiretrack.app.db import session as session_module


def test_sweep_sends_past_due_reminder_and_marks_it_sent(db_session, test_user, make_application, make_sender):
    """Reminder created an hour in the past: one email to the owner, then is_sent is set."""
    app = make_application(test_user, job_title="Platform Engineer", company="Globex")
    reminder = create_reminder(
        db_session,
        user_id=test_user.id,
        application_id=app.id,
        title="Call recruiter",
        description="Ask about next round",
        reminder_date=utcnow() - timedelta(hours=1),
    )
    sender = make_sender()

    processed = sweep_due(db_session, sender=sender)

    assert processed == 1
    assert len(sender.attempts) == 1
    email = sender.attempts[0]
    assert email["to"] == "test@example.com"
    assert "Reminder:" in email["subject"]
    assert "Call recruiter" in email["subject"]
    assert "Platform Engineer at Globex" in email["html"]
    assert "Ask about next round" in email["html"]

    row = db_session.get(Reminder, reminder.id)
    assert row.is_sent is True
    assert row.sent_at is not None


def test_sweep_skips_future_completed_and_already_sent(db_session, test_user, make_application, make_reminder, make_sender):
    app = make_application(test_user)
    future = make_reminder(app, reminder_date=utcnow() + timedelta(days=1))
    completed = make_reminder(app, is_completed=True, completed_at=utcnow())
    already_sent = make_reminder(app, is_sent=True, sent_at=utcnow() - timedelta(minutes=5))
    sender = make_sender()

    assert sweep_due(db_session, sender=sender) == 0
    assert sender.attempts == []

    db_session.expire_all()
    assert db_session.get(Reminder, future.id).is_sent is False
    assert db_session.get(Reminder, completed.id).is_sent is False
    assert db_session.get(Reminder, already_sent.id).is_sent is True


def test_sweep_delivery_failure_does_not_abort_batch(db_session, test_user, other_user, make_application, make_reminder, make_sender):
    """A failed send leaves that reminder pending; the rest of the batch still goes out."""
    failing = make_reminder(make_application(test_user), reminder_date=utcnow() - timedelta(hours=2))
    ok = make_reminder(make_application(other_user), reminder_date=utcnow() - timedelta(hours=1))
    sender = make_sender(fail_for={"test@example.com"})

    processed = sweep_due(db_session, sender=sender)

    # processed counts attempts, not successes
    assert processed == 2
    assert [a["to"] for a in sender.attempts] == ["test@example.com", "other@example.com"]
    db_session.expire_all()
    assert db_session.get(Reminder, failing.id).is_sent is False
    assert db_session.get(Reminder, failing.id).sent_at is None
    assert db_session.get(Reminder, ok.id).is_sent is True


def test_failed_reminder_is_retried_on_next_sweep(db_session, test_user, make_application, make_reminder, make_sender):
    reminder = make_reminder(make_application(test_user))

    sweep_due(db_session, sender=make_sender(fail_for={"test@example.com"}))
    db_session.expire_all()
    assert db_session.get(Reminder, reminder.id).is_sent is False

    retry = make_sender()
    assert sweep_due(db_session, sender=retry) == 1
    assert len(retry.sent) == 1
    db_session.expire_all()
    assert db_session.get(Reminder, reminder.id).is_sent is True

    # Sent reminders are no longer due
    third = make_sender()
    assert sweep_due(db_session, sender=third) == 0
    assert third.attempts == []


def test_sweep_processes_in_reminder_date_order(db_session, test_user, make_application, make_reminder, make_sender):
    app = make_application(test_user)
    make_reminder(app, title="second", reminder_date=utcnow() - timedelta(hours=1))
    make_reminder(app, title="first", reminder_date=utcnow() - timedelta(days=1))
    sender = make_sender()

    sweep_due(db_session, sender=sender)

    assert [a["subject"] for a in sender.attempts] == ["Reminder: first", "Reminder: second"]


def test_overlapping_sweep_does_not_mark_twice(db_session, test_user, make_application, make_reminder, make_sender):
    """If another sweep commits is_sent first, the conditional update affects no rows."""
    reminder = make_reminder(make_application(test_user))
    original_sent_at = utcnow() - timedelta(minutes=1)

    def concurrent_sweep_wins(to, subject):
        other = session_module.SessionLocal()
        try:
            row = other.get(Reminder, reminder.id)
            row.is_sent = True
            row.sent_at = original_sent_at
            other.commit()
        finally:
            other.close()

    sender = make_sender()
    sender.before_send = concurrent_sweep_wins

    assert sweep_due(db_session, sender=sender) == 1
    db_session.expire_all()
    row = db_session.get(Reminder, reminder.id)
    assert row.is_sent is True
    # The winner's timestamp is kept
    assert row.sent_at == original_sent_at


def test_sweep_query_failure_raises_and_sends_nothing(db_session, test_user, make_application, make_reminder, make_sender):
    make_reminder(make_application(test_user))
    sender = make_sender()

    with patch.object(
        db_session,
        "query",
        side_effect=OperationalError("SELECT reminders", {}, Exception("database is locked")),
    ):
        with pytest.raises(PersistenceFailure):
            sweep_due(db_session, sender=sender)

    assert sender.attempts == []


def test_sweep_mark_sent_failure_is_logged_not_raised(db_session, test_user, make_application, make_reminder, make_sender):
    """Email went out but the update failed: sweep carries on, reminder stays pending."""
    reminder = make_reminder(make_application(test_user))
    sender = make_sender()
    real_commit = db_session.commit

    def failing_commit():
        raise OperationalError("UPDATE reminders", {}, Exception("disk I/O error"))

    with patch.object(db_session, "commit", side_effect=failing_commit):
        assert sweep_due(db_session, sender=sender) == 1

    assert len(sender.sent) == 1
    real_commit()
    db_session.expire_all()
    assert db_session.get(Reminder, reminder.id).is_sent is False


def test_sweep_uses_default_sender(db_session, test_user, make_application, make_reminder, sender):
    """Without an explicit sender the process-wide one is used."""
    make_reminder(make_application(test_user), title="Prepare portfolio")

    assert sweep_due(db_session) == 1
    assert sender.sent[0]["subject"] == "Reminder: Prepare portfolio"


def test_sweep_scoped_to_one_owner(db_session, test_user, other_user, make_application, make_reminder, make_sender):
    mine = make_reminder(make_application(test_user))
    theirs = make_reminder(make_application(other_user))
    sender = make_sender()

    assert sweep_due(db_session, sender=sender, user_id=other_user.id) == 1
    assert [a["to"] for a in sender.attempts] == ["other@example.com"]
    db_session.expire_all()
    assert db_session.get(Reminder, mine.id).is_sent is False
    assert db_session.get(Reminder, theirs.id).is_sent is True
