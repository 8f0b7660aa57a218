from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig

ALGORITHM = "HS256"


def create_session_token(
    user_id: UUID, expires_delta: timedelta, secret: Optional[str] = None
) -> str:
    """
    Create a signed session token

    Args:
        user_id: User UUID
        expires_delta: Token lifetime
        secret: Signing key, defaults to ApplicationConfig.AUTH_SECRET

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, secret or ApplicationConfig.AUTH_SECRET, algorithm=ALGORITHM)


def verify_session_token(token: str, secret: Optional[str] = None) -> Optional[dict]:
    """
    Verify and decode a session token

    Args:
        token: JWT token string
        secret: Signing key, defaults to ApplicationConfig.AUTH_SECRET

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token, secret or ApplicationConfig.AUTH_SECRET, algorithms=[ALGORITHM]
        )
        return payload
    except JWTError:
        return None
