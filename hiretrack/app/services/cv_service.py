"""
CV service - upload, list, default selection and delete.

At most one CV per user has is_default set. Both write paths mark the target CV
default first and then clear the flag on the owner's other CVs, inside a single
commit, so a failed lookup never leaves the owner with fewer defaults than before.
"""
import uuid
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hiretrack.app.core.config import CV_ALLOWED_EXTENSIONS, CV_MIME_TYPES, settings
from hiretrack.app.core.exceptions import InvalidInput, NotFound, PersistenceFailure
from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.models.cv import CV
from hiretrack.app.services.storage_service import delete_file, save_file

logger = get_logger("services.cvs")


def _clear_other_defaults(db: Session, user_id: int, keep_id: int) -> int:
    return (
        db.query(CV)
        .filter(CV.user_id == user_id, CV.id != keep_id, CV.is_default.is_(True))
        .update({CV.is_default: False}, synchronize_session=False)
    )


def list_cvs(db: Session, user_id: int) -> list[CV]:
    return (
        db.query(CV)
        .filter(CV.user_id == user_id)
        .order_by(CV.uploaded_at.desc(), CV.id.desc())
        .all()
    )


def upload_cv(
    db: Session,
    user_id: int,
    file_name: str,
    contents: bytes,
    is_default: bool = False,
    version: str | None = None,
) -> CV:
    """
    Store the file and create the CV row. When is_default is requested, the new row
    is created as default and then every other CV of the owner is cleared.
    """
    suffix = Path(file_name or "").suffix.lower()
    if suffix not in CV_ALLOWED_EXTENSIONS:
        raise InvalidInput(f"Invalid file type. Allowed: {', '.join(sorted(CV_ALLOWED_EXTENSIONS))}")
    if not contents:
        raise InvalidInput("Uploaded file is empty")
    if len(contents) > settings.max_upload_bytes:
        raise InvalidInput(f"File too large. Max {settings.max_upload_bytes} bytes")

    unique_name = f"cv-{uuid.uuid4().hex}{suffix}"
    stored = save_file(contents, unique_name, user_id, CV_MIME_TYPES.get(suffix, "application/octet-stream"))

    cv = CV(
        user_id=user_id,
        file_name=Path(file_name).name,
        file_url=stored["url"],
        storage_key=stored["key"],
        file_size=len(contents),
        version=str(version) if version else "1",
        is_default=bool(is_default),
    )
    try:
        db.add(cv)
        db.flush()
        if cv.is_default:
            _clear_other_defaults(db, user_id, cv.id)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        delete_file(stored["key"], stored["url"], user_id)
        logger.exception("CV save failed user_id=%s file_name=%s", user_id, file_name)
        raise PersistenceFailure(f"Failed to save CV: {e}") from e

    db.refresh(cv)
    logger.info(
        "CV uploaded cv_id=%s user_id=%s file_name=%s size_bytes=%d is_default=%s",
        cv.id,
        user_id,
        cv.file_name,
        cv.file_size,
        cv.is_default,
    )
    return cv


def set_default(db: Session, cv_id: int, user_id: int) -> CV:
    """Make cv_id the owner's only default CV. NotFound leaves every CV unchanged."""
    cv = db.query(CV).filter(CV.id == cv_id, CV.user_id == user_id).first()
    if not cv:
        raise NotFound("CV not found")
    try:
        cv.is_default = True
        db.flush()
        cleared = _clear_other_defaults(db, user_id, cv.id)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Set default CV failed cv_id=%s user_id=%s", cv_id, user_id)
        raise PersistenceFailure(f"Failed to set default CV: {e}") from e
    db.refresh(cv)
    logger.info("Default CV set cv_id=%s user_id=%s cleared=%d", cv.id, user_id, cleared)
    return cv


def delete_cv(db: Session, cv_id: int, user_id: int) -> None:
    """Remove the stored file (best effort), then the row. No other CV is promoted to default."""
    cv = db.query(CV).filter(CV.id == cv_id, CV.user_id == user_id).first()
    if not cv:
        raise NotFound("CV not found")
    if not delete_file(cv.storage_key, cv.file_url, user_id):
        logger.warning("CV file not removed, deleting record anyway cv_id=%s user_id=%s", cv_id, user_id)
    db.delete(cv)
    db.commit()
    logger.info("CV deleted cv_id=%s user_id=%s", cv_id, user_id)
