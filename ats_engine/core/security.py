from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ats_engine.core.config import settings

logger = logging.getLogger(__name__)


def check_api_key(x_api_key: str | None) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        logger.info("api_key_rejected provided=%s", bool(x_api_key))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please provide a valid API key to use the scoring API.",
        )
