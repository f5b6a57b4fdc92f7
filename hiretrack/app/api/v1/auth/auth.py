"""
Authentication endpoints - Signup, Login, Current User, and Token Refresh
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from hiretrack.app.core.dependencies import get_current_user, get_db, resolve_token_user, security, unauthorized
from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.core.security import create_access_token
from hiretrack.app.models.user import User
from hiretrack.app.schemas.user import (
    TokenResponse,
    UserLogin,
    UserResponse,
    UserSignup,
    user_to_response,
)
from hiretrack.app.services.auth_service import AuthService

logger = get_logger("api.auth")
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(user_data: UserSignup, db: Session = Depends(get_db)):
    """
    Create an account. The user is logged in after signup.

    - **email**: must be unique
    - **password**: at least 8 characters
    - **firstName** / **lastName**: optional
    """
    logger.info("Signup attempt for email=%s", user_data.email)
    result = AuthService.register_user(db, user_data)
    if not result["success"]:
        logger.warning("Signup failed email=%s reason=%s", user_data.email, result["message"])
        status_code = (
            status.HTTP_409_CONFLICT
            if "already exists" in result["message"]
            else status.HTTP_400_BAD_REQUEST
        )
        raise HTTPException(status_code=status_code, detail=result["message"])

    user = result["user"]
    logger.info("User registered user_id=%s email=%s", user.id, user.email)
    return TokenResponse(
        access_token=result["access_token"],
        token_type=result["token_type"],
        user=user_to_response(user),
    )


@router.post("/login", response_model=TokenResponse)
def login(login_data: UserLogin, db: Session = Depends(get_db)):
    """
    Login user and get access token

    - **email**: User's email address
    - **password**: User's password
    """
    result = AuthService.login_user(db, login_data)
    if not result["success"]:
        logger.warning("Login failed email=%s reason=%s", login_data.email, result["message"])
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result["message"],
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = result["user"]
    logger.info("User logged in user_id=%s", user.id)
    return TokenResponse(
        access_token=result["access_token"],
        token_type=result["token_type"],
        user=user_to_response(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Current authenticated user. Used to refresh auth state on app load."""
    return user_to_response(current_user)


@router.post("/refresh", response_model=TokenResponse)
def refresh_access_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
):
    """
    Refresh access token. Accepts current token (even if expired) and returns a new token.
    """
    if not credentials:
        raise unauthorized("Token required")
    user = resolve_token_user(db, credentials.credentials, verify_exp=False)
    access_token = create_access_token(data={"sub": str(user.id), "email": user.email})
    return TokenResponse(access_token=access_token, token_type="bearer", user=user_to_response(user))
