"""
User service - profile and notification preferences
"""
from sqlalchemy.orm import Session

from hiretrack.app.models.user import User
from hiretrack.app.schemas.user import NotificationSettingsUpdate, ProfileUpdate


class UserService:
    @staticmethod
    def update_profile(db: Session, user: User, payload: ProfileUpdate) -> User:
        if payload.firstName is not None:
            user.first_name = payload.firstName.strip()
        if payload.lastName is not None:
            user.last_name = payload.lastName.strip()
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_notifications(db: Session, user: User, payload: NotificationSettingsUpdate) -> User:
        if payload.weeklySummary is not None:
            user.weekly_summary = payload.weeklySummary
        db.commit()
        db.refresh(user)
        return user
