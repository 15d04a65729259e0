# app/core/jwt.py

from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

from app.core.config import settings

TOKEN_TYPE = "access"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Sign ``data`` with ``iat``/``exp`` claims; lifetime defaults to the configured expiry."""
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    claims = {**data, "iat": issued_at, "exp": expire, "type": TOKEN_TYPE}

    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except JWTError:
        return None

    # Only access tokens are accepted as bearer credentials
    if payload.get("type") != TOKEN_TYPE:
        return None

    return payload
