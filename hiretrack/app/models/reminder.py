"""
Reminder - a dated follow-up on an application, emailed once when due
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from hiretrack.app.db.base import Base
from hiretrack.app.utils.dates import utcnow


class Reminder(Base):
    __tablename__ = "reminders"
    __table_args__ = (
        # due sweep: reminder_date <= now AND NOT is_sent AND NOT is_completed
        Index("ix_reminders_due", "is_sent", "is_completed", "reminder_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    application_id = Column(
        Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, default="")
    reminder_date = Column(DateTime, nullable=False)  # naive UTC

    is_sent = Column(Boolean, default=False, nullable=False)
    sent_at = Column(DateTime, nullable=True)
    is_completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow)

    user = relationship("User")
    application = relationship("Application", back_populates="reminders")
