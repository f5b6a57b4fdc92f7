"""
CV - uploaded CV files per user. At most one per user has is_default set.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from hiretrack.app.db.base import Base
from hiretrack.app.utils.dates import utcnow


class CV(Base):
    __tablename__ = "cvs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    file_name = Column(String(255), nullable=False)  # original client filename
    file_url = Column(String(1024), nullable=False)  # /uploads/cvs/<name> or S3 URL
    storage_key = Column(String(512), nullable=False)  # local filename or S3 object key
    file_size = Column(Integer, default=0)
    version = Column(String(50), default="1")
    is_default = Column(Boolean, default=False, nullable=False)

    uploaded_at = Column(DateTime, default=utcnow)
