"""
Reminder service - reminder lifecycle and the due-reminder email sweep.

Every read and write is scoped by owner (user_id). Updates and deletes filter on
(id, user_id) together and treat zero affected rows as NotFound.
"""
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from hiretrack.app.core.config import UPCOMING_WINDOW_DAYS
from hiretrack.app.core.exceptions import InvalidInput, NotFound, PersistenceFailure
from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.models.application import Application
from hiretrack.app.models.reminder import Reminder
from hiretrack.app.services.notification_service import EmailSender, send_reminder_email
from hiretrack.app.utils.dates import parse_datetime, utcnow

logger = get_logger("services.reminders")


def _owned(db: Session, user_id: int):
    return (
        db.query(Reminder)
        .options(joinedload(Reminder.application))
        .filter(Reminder.user_id == user_id)
    )


def get_reminder(db: Session, reminder_id: int, user_id: int) -> Reminder:
    reminder = _owned(db, user_id).filter(Reminder.id == reminder_id).first()
    if not reminder:
        raise NotFound("Reminder not found")
    return reminder


def create_reminder(
    db: Session,
    user_id: int,
    application_id: int,
    title: str,
    reminder_date: datetime | str,
    description: str | None = None,
) -> Reminder:
    """
    Create a reminder on one of the owner's applications.
    Past dates are accepted; such reminders are due on the next sweep.
    """
    title = (title or "").strip()
    if not title:
        raise InvalidInput("Title is required")
    when = parse_datetime(reminder_date, "reminder date")

    application = (
        db.query(Application)
        .filter(Application.id == application_id, Application.user_id == user_id)
        .first()
    )
    if not application:
        raise NotFound("Application not found")

    reminder = Reminder(
        user_id=user_id,
        application_id=application.id,
        title=title,
        description=description or "",
        reminder_date=when,
    )
    db.add(reminder)
    db.commit()
    logger.info(
        "Reminder created reminder_id=%s user_id=%s application_id=%s reminder_date=%s",
        reminder.id,
        user_id,
        application.id,
        when.isoformat(),
    )
    return get_reminder(db, reminder.id, user_id)


def list_reminders(
    db: Session,
    user_id: int,
    limit: int | None = None,
    offset: int = 0,
) -> list[Reminder]:
    """All of the owner's reminders, reminder_date ascending. Unbounded unless limit is given."""
    q = _owned(db, user_id).order_by(Reminder.reminder_date.asc(), Reminder.id.asc())
    if offset:
        q = q.offset(offset)
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def list_upcoming(db: Session, user_id: int) -> list[Reminder]:
    """Pending reminders due within [now, now + 7 days], ascending."""
    now = utcnow()
    horizon = now + timedelta(days=UPCOMING_WINDOW_DAYS)
    return (
        _owned(db, user_id)
        .filter(
            Reminder.reminder_date >= now,
            Reminder.reminder_date <= horizon,
            Reminder.is_sent.is_(False),
            Reminder.is_completed.is_(False),
        )
        .order_by(Reminder.reminder_date.asc(), Reminder.id.asc())
        .all()
    )


def mark_complete(db: Session, reminder_id: int, user_id: int) -> Reminder:
    """Set is_completed and (re-)stamp completed_at."""
    updated = (
        db.query(Reminder)
        .filter(Reminder.id == reminder_id, Reminder.user_id == user_id)
        .update(
            {Reminder.is_completed: True, Reminder.completed_at: utcnow()},
            synchronize_session=False,
        )
    )
    if not updated:
        db.rollback()
        raise NotFound("Reminder not found")
    db.commit()
    logger.info("Reminder completed reminder_id=%s user_id=%s", reminder_id, user_id)
    return get_reminder(db, reminder_id, user_id)


def delete_reminder(db: Session, reminder_id: int, user_id: int) -> None:
    deleted = (
        db.query(Reminder)
        .filter(Reminder.id == reminder_id, Reminder.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFound("Reminder not found")
    db.commit()
    logger.info("Reminder deleted reminder_id=%s user_id=%s", reminder_id, user_id)


def build_reminder_payload(reminder: Reminder) -> dict:
    app = reminder.application
    return {
        "title": reminder.title,
        "description": reminder.description or "",
        "reminder_date": reminder.reminder_date,
        "application_title": f"{app.job_title} at {app.company}" if app else "",
        "application_id": reminder.application_id,
    }


def sweep_due(db: Session, sender: EmailSender | None = None, user_id: int | None = None) -> int:
    """
    Email every due reminder (reminder_date <= now, not sent, not completed).

    Each reminder is marked sent only after its email went out, with a conditional
    update on is_sent = false so overlapping sweeps cannot both commit it.
    Delivery failures are logged and the reminder stays pending for the next sweep.
    With user_id, only that owner's reminders are swept.
    Returns the number of reminders attempted, not the number delivered.
    Raises PersistenceFailure only when the initial query fails.
    """
    now = utcnow()
    try:
        q = (
            db.query(Reminder)
            .options(joinedload(Reminder.user), joinedload(Reminder.application))
            .filter(
                Reminder.reminder_date <= now,
                Reminder.is_sent.is_(False),
                Reminder.is_completed.is_(False),
            )
        )
        if user_id is not None:
            q = q.filter(Reminder.user_id == user_id)
        due = q.order_by(Reminder.reminder_date.asc(), Reminder.id.asc()).all()
        # Snapshot before any commit expires the loaded rows
        batch = [
            (r.id, r.user.email if r.user else "", build_reminder_payload(r))
            for r in due
        ]
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Reminder sweep query failed error=%s", e)
        raise PersistenceFailure(f"Reminder sweep query failed: {e}") from e

    logger.info("Reminder sweep started due=%d", len(batch))
    processed = 0
    sent = 0
    for reminder_id, to, payload in batch:
        processed += 1
        try:
            send_reminder_email(to, payload, sender=sender)
        except Exception as e:
            logger.error("Reminder delivery failed reminder_id=%s to=%s error=%s", reminder_id, to, e)
            continue

        try:
            updated = (
                db.query(Reminder)
                .filter(Reminder.id == reminder_id, Reminder.is_sent.is_(False))
                .update(
                    {Reminder.is_sent: True, Reminder.sent_at: utcnow()},
                    synchronize_session=False,
                )
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "Reminder sent but not marked reminder_id=%s error=%s - will be resent on next sweep",
                reminder_id,
                e,
            )
            continue

        if updated:
            sent += 1
        else:
            logger.warning("Reminder already marked sent by another sweep reminder_id=%s", reminder_id)

    logger.info("Reminder sweep finished processed=%d sent=%d", processed, sent)
    return processed
