"""
Users API - profile and notification preferences
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hiretrack.app.core.dependencies import get_current_user, get_db
from hiretrack.app.models.user import User
from hiretrack.app.schemas.user import (
    NotificationSettingsUpdate,
    ProfileUpdate,
    UserResponse,
    user_to_response,
)
from hiretrack.app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return user_to_response(current_user)


@router.patch("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update first/last name."""
    return user_to_response(UserService.update_profile(db, current_user, payload))


@router.patch("/notifications", response_model=UserResponse)
def update_notifications(
    payload: NotificationSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Turn the weekly summary email on or off."""
    return user_to_response(UserService.update_notifications(db, current_user, payload))
