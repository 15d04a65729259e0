# app/core/auth.py

import logging

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from app.core.jwt import decode_access_token
from app.core.oauth2 import bearer_scheme
from app.schemas.common import validate_uuid

logger = logging.getLogger("app.auth")


def get_user_id(x_user_id: str | None = Header(None, alias="X-USER-ID")) -> str:
    """Caller identity forwarded by the gateway in the X-USER-ID header."""
    if not x_user_id:
        logger.error("middleware::user_id_header - Unauthorized [Header not set]")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    try:
        return validate_uuid(x_user_id)
    except ValueError:
        logger.warning(f"middleware::user_id_header - Malformed user id {x_user_id!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    payload = decode_access_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    user_id = payload.get("sub")

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    return user_id
