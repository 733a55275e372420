from __future__ import annotations

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ats_engine.core.config import settings


def client_key(request: Request) -> str:
    """Rate-limit key: first X-Forwarded-For hop when behind a proxy, else the peer address."""
    forwarded_for = request.headers.get("x-forwarded-for", "")
    if forwarded_for.strip():
        return forwarded_for.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(key_func=client_key, enabled=settings.rate_limit_enabled)


def rate_limit():
    """Per-client limit from RATE_LIMIT, or a no-op decorator when limiting is disabled."""
    if settings.rate_limit_enabled:
        return limiter.limit(settings.rate_limit)

    def decorator(func):
        return func

    return decorator
