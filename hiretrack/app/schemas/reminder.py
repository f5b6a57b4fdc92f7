"""
Reminder Pydantic schemas - camelCase to match the web client
"""
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel

from hiretrack.app.utils.dates import isoformat_utc


class ReminderCreate(BaseModel):
    applicationId: int
    title: str
    description: Optional[str] = None
    # Parsed by the service so a bad value surfaces as InvalidInput (400)
    reminderDate: Union[datetime, str]


class ApplicationSummary(BaseModel):
    jobTitle: str = ""
    company: str = ""


class ReminderOut(BaseModel):
    id: int
    userId: int
    applicationId: int
    title: str
    description: str = ""
    reminderDate: str
    isSent: bool = False
    sentAt: Optional[str] = None
    isCompleted: bool = False
    completedAt: Optional[str] = None
    createdAt: Optional[str] = None
    application: Optional[ApplicationSummary] = None


def reminder_to_out(reminder) -> ReminderOut:
    """Serialize a Reminder row, joined with its application's title/company when loaded."""
    app = reminder.application
    return ReminderOut(
        id=reminder.id,
        userId=reminder.user_id,
        applicationId=reminder.application_id,
        title=reminder.title,
        description=reminder.description or "",
        reminderDate=isoformat_utc(reminder.reminder_date),
        isSent=bool(reminder.is_sent),
        sentAt=isoformat_utc(reminder.sent_at),
        isCompleted=bool(reminder.is_completed),
        completedAt=isoformat_utc(reminder.completed_at),
        createdAt=isoformat_utc(reminder.created_at),
        application=ApplicationSummary(jobTitle=app.job_title or "", company=app.company or "") if app else None,
    )
