"""
Application service - CRUD, status timestamps and per-user stats
"""
from datetime import timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from hiretrack.app.core.config import APPLICATION_STATUSES, STATUS_TIMESTAMP_FIELDS
from hiretrack.app.core.exceptions import InvalidInput, NotFound
from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.models.application import Application
from hiretrack.app.models.cv import CV
from hiretrack.app.schemas.application import (
    APPLICATION_FIELD_MAP,
    ApplicationCreate,
    ApplicationUpdate,
)
from hiretrack.app.utils.dates import to_utc_naive, utcnow

logger = get_logger("services.applications")


def stats_cache_key(user_id: int) -> str:
    return f"application_stats:{user_id}"


def _payload_to_columns(data: dict) -> dict:
    columns = {}
    for key, value in data.items():
        column = APPLICATION_FIELD_MAP.get(key)
        if not column:
            continue
        if hasattr(value, "tzinfo"):
            value = to_utc_naive(value)
        columns[column] = value
    return columns


def _check_cv_owned(db: Session, user_id: int, cv_id: int | None) -> None:
    if cv_id is None:
        return
    if not db.query(CV.id).filter(CV.id == cv_id, CV.user_id == user_id).first():
        raise NotFound("CV not found")


class ApplicationService:
    @staticmethod
    def create(db: Session, user_id: int, payload: ApplicationCreate) -> Application:
        data = _payload_to_columns(payload.model_dump(exclude_none=True))
        if not (data.get("job_title") or "").strip() or not (data.get("company") or "").strip():
            raise InvalidInput("jobTitle and company are required")
        _check_cv_owned(db, user_id, data.get("cv_id"))
        application = Application(user_id=user_id, **data)
        stamp = STATUS_TIMESTAMP_FIELDS.get(application.status)
        if stamp and getattr(application, stamp) is None:
            setattr(application, stamp, utcnow())
        db.add(application)
        db.commit()
        db.refresh(application)
        logger.info("Application created application_id=%s user_id=%s", application.id, user_id)
        return application

    @staticmethod
    def list_for_user(
        db: Session,
        user_id: int,
        status: str | None = None,
        company: str | None = None,
    ) -> list[Application]:
        q = (
            db.query(Application)
            .options(joinedload(Application.cv))
            .filter(Application.user_id == user_id)
        )
        if status:
            q = q.filter(Application.status == status)
        if company:
            q = q.filter(func.lower(Application.company).contains(company.strip().lower()))
        return q.order_by(Application.applied_at.desc(), Application.id.desc()).all()

    @staticmethod
    def get(db: Session, application_id: int, user_id: int) -> Application:
        application = (
            db.query(Application)
            .options(joinedload(Application.cv), joinedload(Application.reminders))
            .filter(Application.id == application_id, Application.user_id == user_id)
            .first()
        )
        if not application:
            raise NotFound("Application not found")
        return application

    @staticmethod
    def update(db: Session, application_id: int, user_id: int, payload: ApplicationUpdate) -> Application:
        """
        Partial update. When status becomes INTERVIEW/OFFER/REJECTED, the matching
        timestamp is stamped unless it is supplied or already stored.
        Moving back to an earlier status does not clear anything.
        """
        application = (
            db.query(Application)
            .filter(Application.id == application_id, Application.user_id == user_id)
            .first()
        )
        if not application:
            raise NotFound("Application not found")

        data = _payload_to_columns(payload.model_dump(exclude_unset=True))
        for required in ("job_title", "company", "status"):
            if required in data and not (data[required] or "").strip():
                raise InvalidInput(f"{required} cannot be empty")
        if "cv_id" in data:
            _check_cv_owned(db, user_id, data["cv_id"])

        for column, value in data.items():
            setattr(application, column, value)

        stamp = STATUS_TIMESTAMP_FIELDS.get(data.get("status"))
        if stamp and stamp not in data and getattr(application, stamp) is None:
            setattr(application, stamp, utcnow())

        db.commit()
        logger.info(
            "Application updated application_id=%s user_id=%s fields=%s",
            application_id,
            user_id,
            sorted(data),
        )
        return ApplicationService.get(db, application_id, user_id)

    @staticmethod
    def delete(db: Session, application_id: int, user_id: int) -> None:
        """Delete the application and its reminders."""
        application = (
            db.query(Application)
            .filter(Application.id == application_id, Application.user_id == user_id)
            .first()
        )
        if not application:
            raise NotFound("Application not found")
        db.delete(application)
        db.commit()
        logger.info("Application deleted application_id=%s user_id=%s", application_id, user_id)

    @staticmethod
    def stats(db: Session, user_id: int) -> dict:
        rows = (
            db.query(Application.status, func.count(Application.id))
            .filter(Application.user_id == user_id)
            .group_by(Application.status)
            .all()
        )
        counts = {status: count for status, count in rows}
        total = sum(counts.values())
        by_status = {s: counts.get(s, 0) for s in APPLICATION_STATUSES}

        responded = by_status["INTERVIEW"] + by_status["OFFER"] + by_status["REJECTED"]
        interviewed = by_status["INTERVIEW"] + by_status["OFFER"]
        response_rate = responded / total * 100 if total else 0
        interview_rate = interviewed / total * 100 if total else 0

        return {
            "total": total,
            "byStatus": by_status,
            "responseRate": f"{response_rate:.2f}",
            "interviewRate": f"{interview_rate:.2f}",
        }

    @staticmethod
    def weekly_counts(db: Session, user_id: int) -> dict:
        """Counts for the weekly summary email: total, new in last 7 days, interviews, offers."""
        base = db.query(Application).filter(Application.user_id == user_id)
        week_ago = utcnow() - timedelta(days=7)
        return {
            "total": base.count(),
            "new_this_week": base.filter(Application.created_at >= week_ago).count(),
            "interviews": base.filter(Application.status == "INTERVIEW").count(),
            "offers": base.filter(Application.status == "OFFER").count(),
        }
