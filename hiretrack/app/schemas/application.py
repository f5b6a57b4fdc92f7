"""
Application Pydantic schemas - camelCase to match the web client
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from hiretrack.app.schemas.cv import CVOut, cv_to_out
from hiretrack.app.schemas.reminder import ReminderOut, reminder_to_out
from hiretrack.app.utils.dates import isoformat_utc

# camelCase payload key -> Application column
APPLICATION_FIELD_MAP: dict[str, str] = {
    "jobTitle": "job_title",
    "company": "company",
    "location": "location",
    "salary": "salary",
    "jobUrl": "job_url",
    "jobDescription": "job_description",
    "notes": "notes",
    "status": "status",
    "cvId": "cv_id",
    "appliedAt": "applied_at",
    "interviewDate": "interview_date",
    "offerReceivedAt": "offer_received_at",
    "rejectedAt": "rejected_at",
}


class ApplicationCreate(BaseModel):
    jobTitle: str
    company: str
    location: Optional[str] = None
    salary: Optional[str] = None
    jobUrl: Optional[str] = None
    jobDescription: Optional[str] = None
    notes: Optional[str] = None
    status: str = "APPLIED"
    cvId: Optional[int] = None
    appliedAt: Optional[datetime] = None


class ApplicationUpdate(BaseModel):
    """Partial update. Unknown keys (id, userId, createdAt, cv, reminders...) are ignored."""
    jobTitle: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    jobUrl: Optional[str] = None
    jobDescription: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    cvId: Optional[int] = None
    appliedAt: Optional[datetime] = None
    interviewDate: Optional[datetime] = None
    offerReceivedAt: Optional[datetime] = None
    rejectedAt: Optional[datetime] = None


class ApplicationOut(BaseModel):
    id: int
    userId: int
    jobTitle: str
    company: str
    location: Optional[str] = None
    salary: Optional[str] = None
    jobUrl: Optional[str] = None
    jobDescription: Optional[str] = None
    notes: Optional[str] = None
    status: str
    cvId: Optional[int] = None
    appliedAt: Optional[str] = None
    interviewDate: Optional[str] = None
    offerReceivedAt: Optional[str] = None
    rejectedAt: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    cv: Optional[CVOut] = None
    reminders: Optional[list[ReminderOut]] = None


class ApplicationStats(BaseModel):
    total: int
    byStatus: dict[str, int]
    responseRate: str
    interviewRate: str


def application_to_out(app, include_reminders: bool = False) -> ApplicationOut:
    return ApplicationOut(
        id=app.id,
        userId=app.user_id,
        jobTitle=app.job_title,
        company=app.company,
        location=app.location,
        salary=app.salary,
        jobUrl=app.job_url,
        jobDescription=app.job_description,
        notes=app.notes,
        status=app.status,
        cvId=app.cv_id,
        appliedAt=isoformat_utc(app.applied_at),
        interviewDate=isoformat_utc(app.interview_date),
        offerReceivedAt=isoformat_utc(app.offer_received_at),
        rejectedAt=isoformat_utc(app.rejected_at),
        createdAt=isoformat_utc(app.created_at),
        updatedAt=isoformat_utc(app.updated_at),
        cv=cv_to_out(app.cv) if app.cv else None,
        reminders=[reminder_to_out(r) for r in app.reminders] if include_reminders else None,
    )
