"""
Application - a job application tracked by a user
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from hiretrack.app.db.base import Base
from hiretrack.app.utils.dates import utcnow


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    cv_id = Column(Integer, ForeignKey("cvs.id", ondelete="SET NULL"), nullable=True)

    job_title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    salary = Column(String(100), nullable=True)
    job_url = Column(String(1024), nullable=True)
    job_description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    # APPLIED, INTERVIEW, OFFER, REJECTED; not gated, any value is stored
    status = Column(String(50), default="APPLIED", nullable=False, index=True)

    applied_at = Column(DateTime, default=utcnow)
    interview_date = Column(DateTime, nullable=True)
    offer_received_at = Column(DateTime, nullable=True)
    rejected_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User")
    cv = relationship("CV")
    reminders = relationship(
        "Reminder",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="Reminder.reminder_date",
    )
