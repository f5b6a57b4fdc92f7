"""
User Pydantic schemas for request/response validation
"""
from typing import Optional

from pydantic import BaseModel, Field

from hiretrack.app.utils.dates import isoformat_utc


class UserSignup(BaseModel):
    """Schema for user registration"""
    email: str
    password: str = Field(min_length=8)
    firstName: str = ""
    lastName: str = ""


class UserLogin(BaseModel):
    """Schema for user login"""
    email: str
    password: str


class UserResponse(BaseModel):
    """Schema for user response"""
    id: int
    email: str
    firstName: str = ""
    lastName: str = ""
    weeklySummary: bool = True
    createdAt: Optional[str] = None


class TokenResponse(BaseModel):
    """Schema for token response"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdate(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None


class NotificationSettingsUpdate(BaseModel):
    weeklySummary: Optional[bool] = None


def user_to_response(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email or "",
        firstName=user.first_name or "",
        lastName=user.last_name or "",
        weeklySummary=bool(user.weekly_summary),
        createdAt=isoformat_utc(user.created_at),
    )
