"""
CV endpoints - multipart upload to S3/local storage, list, set default, delete
"""
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from hiretrack.app.core.dependencies import get_current_user, get_db
from hiretrack.app.core.exceptions import InvalidInput, NotFound, PersistenceFailure
from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.models.user import User
from hiretrack.app.schemas.cv import CVOut, cv_to_out
from hiretrack.app.services import cv_service

logger = get_logger("api.cvs")
router = APIRouter(prefix="/cvs", tags=["cvs"])


def _parse_flag(value: str | None) -> bool:
    # multipart form fields arrive as strings
    return (value or "").strip().lower() in ("true", "1", "yes", "on")


@router.post("/upload", response_model=CVOut, status_code=status.HTTP_201_CREATED)
async def upload_cv(
    file: UploadFile = File(...),
    isDefault: str | None = Form(default=None),
    version: str | None = Form(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Upload a CV file (PDF, DOC, DOCX).

    - **file**: the CV
    - **isDefault**: "true" makes this the only default CV of the user
    - **version**: free-form version label, default "1"
    """
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    logger.info("CV upload started user_id=%s filename=%s", current_user.id, file.filename)
    try:
        contents = await file.read()
    except Exception as e:
        logger.exception("CV upload failed - could not read file user_id=%s", current_user.id)
        raise HTTPException(status_code=500, detail=f"Failed to read file: {str(e)}")

    try:
        cv = cv_service.upload_cv(
            db,
            user_id=current_user.id,
            file_name=file.filename,
            contents=contents,
            is_default=_parse_flag(isDefault),
            version=version,
        )
    except InvalidInput as e:
        logger.warning("CV upload rejected user_id=%s reason=%s", current_user.id, e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except (RuntimeError, PersistenceFailure) as e:
        raise HTTPException(status_code=500, detail=str(e))
    return cv_to_out(cv)


@router.get("", response_model=list[CVOut])
def list_cvs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the current user's CVs, newest first."""
    return [cv_to_out(cv) for cv in cv_service.list_cvs(db, current_user.id)]


@router.patch("/{cv_id}/default", response_model=CVOut)
def set_default_cv(
    cv_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        cv = cv_service.set_default(db, cv_id, current_user.id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=e.message)
    return cv_to_out(cv)


@router.delete("/{cv_id}")
def delete_cv(
    cv_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a CV: stored file first (best effort), then the record."""
    try:
        cv_service.delete_cv(db, cv_id, current_user.id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return {"deleted": cv_id}
