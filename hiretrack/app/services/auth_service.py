"""
Authentication service business logic
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hiretrack.app.core.security import create_access_token, get_password_hash, verify_password
from hiretrack.app.models.user import User
from hiretrack.app.schemas.user import UserLogin, UserSignup
from hiretrack.app.utils.dates import utcnow


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Service for authentication operations"""

    @staticmethod
    def register_user(db: Session, user_data: UserSignup):
        """Register a new user"""
        email = _normalize_email(user_data.email)
        if not email or "@" not in email:
            return {"success": False, "message": "A valid email is required"}

        existing_user = db.query(User).filter(User.email == email).first()
        if existing_user:
            return {"success": False, "message": "User with this email already exists"}

        new_user = User(
            email=email,
            hashed_password=get_password_hash(user_data.password),
            first_name=user_data.firstName,
            last_name=user_data.lastName,
        )
        try:
            db.add(new_user)
            db.commit()
            db.refresh(new_user)
        except IntegrityError:
            db.rollback()
            return {"success": False, "message": "User with this email already exists"}

        # User is logged in after signup
        access_token = create_access_token(data={"sub": str(new_user.id), "email": new_user.email})
        return {
            "success": True,
            "user": new_user,
            "access_token": access_token,
            "token_type": "bearer",
        }

    @staticmethod
    def login_user(db: Session, login_data: UserLogin):
        """Authenticate user and return access token"""
        user = db.query(User).filter(User.email == _normalize_email(login_data.email)).first()

        if not user or not verify_password(login_data.password, user.hashed_password):
            return {"success": False, "message": "Invalid credentials"}

        if not user.is_active:
            return {"success": False, "message": "User account is inactive"}

        user.last_login_at = utcnow()
        db.commit()
        db.refresh(user)

        access_token = create_access_token(data={"sub": str(user.id), "email": user.email})
        return {
            "success": True,
            "access_token": access_token,
            "token_type": "bearer",
            "user": user,
        }
