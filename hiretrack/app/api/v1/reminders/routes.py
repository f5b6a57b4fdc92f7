"""
Reminders API - create, list, upcoming, complete, delete
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from hiretrack.app.core.dependencies import get_current_user, get_db
from hiretrack.app.core.exceptions import InvalidInput, NotFound
from hiretrack.app.models.user import User
from hiretrack.app.schemas.reminder import ReminderCreate, ReminderOut, reminder_to_out
from hiretrack.app.services import reminder_service

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.post("", response_model=ReminderOut, status_code=status.HTTP_201_CREATED)
def create_reminder(
    payload: ReminderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a reminder on one of the current user's applications.

    - **applicationId**: application the reminder is about
    - **title**: short label, used in the email subject
    - **reminderDate**: ISO-8601; without a zone it is taken as UTC. Past dates are accepted.
    """
    try:
        reminder = reminder_service.create_reminder(
            db,
            user_id=current_user.id,
            application_id=payload.applicationId,
            title=payload.title,
            description=payload.description,
            reminder_date=payload.reminderDate,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return reminder_to_out(reminder)


@router.get("", response_model=list[ReminderOut])
def list_reminders(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All reminders of the current user, soonest first. limit/offset are optional."""
    reminders = reminder_service.list_reminders(db, current_user.id, limit=limit, offset=offset)
    return [reminder_to_out(r) for r in reminders]


@router.get("/upcoming", response_model=list[ReminderOut])
def list_upcoming_reminders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Pending reminders due in the next 7 days."""
    return [reminder_to_out(r) for r in reminder_service.list_upcoming(db, current_user.id)]


@router.patch("/{reminder_id}/complete", response_model=ReminderOut)
def complete_reminder(
    reminder_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        reminder = reminder_service.mark_complete(db, reminder_id, current_user.id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return reminder_to_out(reminder)


@router.delete("/{reminder_id}")
def delete_reminder(
    reminder_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        reminder_service.delete_reminder(db, reminder_id, current_user.id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return {"deleted": reminder_id}
