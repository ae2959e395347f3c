from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from app.bizdash.core.config import settings


@dataclass(frozen=True)
class SessionValidation:
    valid: bool
    reason: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)


def create_access_token(data: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.AUTH_SECRET, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    return jwt.decode(token, settings.AUTH_SECRET, algorithms=[settings.ALGORITHM])


def verify_session_token(token: str | None) -> SessionValidation:
    if not token:
        return SessionValidation(valid=False, reason="missing_token")
    try:
        claims = decode_token(token)
    except ExpiredSignatureError:
        return SessionValidation(valid=False, reason="expired_token")
    except JWTError:
        return SessionValidation(valid=False, reason="invalid_token")
    return SessionValidation(valid=True, claims=claims)
