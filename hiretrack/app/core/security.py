"""
Password hashing and JWT access tokens
"""
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt

from hiretrack.app.core.config import settings


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt (first 72 bytes are significant)."""
    return bcrypt.hashpw(password.encode("utf-8")[:72], bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8")[:72], hashed_password.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a signed JWT. `data` should carry `sub` (user id as string)."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, verify_exp: bool = True) -> int:
    """
    Return the user id carried in `sub`.
    Raises JWTError for a bad signature or expiry, ValueError for a missing or non-numeric subject.
    """
    payload = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.algorithm],
        options={"verify_exp": verify_exp},
    )
    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise ValueError("Token has no user subject")
    return int(subject)
