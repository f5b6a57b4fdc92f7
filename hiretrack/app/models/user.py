"""
User database model
"""
from sqlalchemy import Boolean, Column, DateTime, Integer, String

from hiretrack.app.db.base import Base
from hiretrack.app.utils.dates import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=True)
    first_name = Column(String(100), default="")
    last_name = Column(String(100), default="")
    is_active = Column(Boolean, default=True, nullable=False)

    # Weekly summary email opt-in
    weekly_summary = Column(Boolean, default=True, nullable=False)

    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def display_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or (self.email or "").split("@")[0]
