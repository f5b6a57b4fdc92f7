"""
Request dependencies: DB session per request and the bearer-token user
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from hiretrack.app.core.security import decode_access_token
from hiretrack.app.db import session as db_session
from hiretrack.app.models.user import User

security = HTTPBearer(auto_error=False)


def get_db() -> Session:
    """Get database session"""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_token_user(db: Session, token: str, verify_exp: bool = True) -> User:
    """Active user named by the token's `sub`, or 401."""
    try:
        user_id = decode_access_token(token, verify_exp=verify_exp)
    except JWTError:
        raise unauthorized("Invalid or expired token")
    except ValueError:
        raise unauthorized("Invalid token")
    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise unauthorized("User not found")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current authenticated user from JWT"""
    if not credentials:
        raise unauthorized("Not authenticated")
    return resolve_token_user(db, credentials.credentials)
