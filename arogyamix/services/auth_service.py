from datetime import datetime, timedelta

import bcrypt
from jose import jwt

from arogyamix.config import settings


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> tuple[str, datetime]:
    """Sign a JWT for `data`; returns the token and its expiry (naive UTC)."""
    expires_at = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = data.copy()
    payload.update({"exp": expires_at, "type": "access"})
    token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.ALGORITHM)
    return token, expires_at
