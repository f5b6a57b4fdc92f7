"""
Notifications API - on-demand reminder sweep and weekly summary
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hiretrack.app.core.dependencies import get_current_user, get_db
from hiretrack.app.core.exceptions import DeliveryFailure, PersistenceFailure
from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.models.user import User
from hiretrack.app.services.reminder_service import sweep_due
from hiretrack.app.services.summary_service import send_weekly_summary_to_user

logger = get_logger("api.notifications")
router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/reminders/sweep")
def trigger_reminder_sweep(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    """
    Send the current user's due reminders now. The scheduler sweeps every user.
    Returns how many due reminders were attempted; failed sends stay pending.
    """
    logger.info("Manual reminder sweep requested user_id=%s", current_user.id)
    try:
        processed = sweep_due(db, user_id=current_user.id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return {"processed": processed}


@router.post("/weekly-summary")
def send_my_weekly_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    """Email the current user's weekly summary now."""
    try:
        result = send_weekly_summary_to_user(db, current_user)
    except DeliveryFailure as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return result
