from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import os

from jose import JWTError, jwt

from app.core.errors import Unauthorized

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


@dataclass(frozen=True)
class Principal:
    """Authenticated caller. ``user_id`` is the identity provider's opaque subject."""

    user_id: str


def require_principal(principal: Principal | None) -> Principal:
    if principal is None:
        raise Unauthorized()
    return principal


def _get_jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise RuntimeError("JWT_SECRET is not set")
    return secret


def create_access_token(user_id: str, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {
        "sub": user_id,
        "exp": expire,
    }
    return jwt.encode(payload, _get_jwt_secret(), algorithm=ALGORITHM)


def decode_access_token(token: str) -> str:
    payload = jwt.decode(token, _get_jwt_secret(), algorithms=[ALGORITHM])
    subject = payload.get("sub")
    if not subject:
        raise JWTError("Missing subject")
    return str(subject)
