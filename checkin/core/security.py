"""Password hashing and signed session tokens."""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt

from checkin.config import settings

SESSION_TOKEN_TYPE = "session"


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt and a random salt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed hash in the database
        return False


def create_session_token(
    data: dict, expires_delta: timedelta | None = None
) -> str:
    """Create a signed teacher session token (JWT)."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire, "type": SESSION_TOKEN_TYPE})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and verify a token. Raises ``jose.JWTError`` when invalid."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
