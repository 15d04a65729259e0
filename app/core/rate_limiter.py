# app/core/rate_limiter.py

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT] if settings.ENV == "production" else [],
    enabled=settings.ENV != "test",
)
