"""
Weekly summary digest - per-user application counts emailed to opted-in users
"""
from sqlalchemy.orm import Session

from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.models.user import User
from hiretrack.app.services.application_service import ApplicationService
from hiretrack.app.services.notification_service import EmailSender, send_weekly_summary

logger = get_logger("services.summary")


def build_weekly_summary(db: Session, user: User) -> dict:
    data = ApplicationService.weekly_counts(db, user.id)
    data["user_name"] = user.display_name
    return data


def send_weekly_summary_to_user(db: Session, user: User, sender: EmailSender | None = None) -> dict:
    """Send one user's digest. DeliveryFailure propagates."""
    data = build_weekly_summary(db, user)
    result = send_weekly_summary(user.email, data, sender=sender)
    logger.info("Weekly summary sent user_id=%s total=%s", user.id, data["total"])
    return result


def send_weekly_summaries(db: Session, sender: EmailSender | None = None) -> int:
    """Send digests to every active user with weekly_summary enabled. Returns users processed."""
    users = (
        db.query(User)
        .filter(User.is_active.is_(True), User.weekly_summary.is_(True))
        .order_by(User.id.asc())
        .all()
    )
    processed = 0
    for user in users:
        processed += 1
        try:
            send_weekly_summary_to_user(db, user, sender=sender)
        except Exception as e:
            logger.error("Weekly summary failed user_id=%s error=%s", user.id, e)
    return processed
