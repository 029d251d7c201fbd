"""Shared Redis client for rate limiting; None when no limit is configured."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

import redis

from app.config import get_settings


@lru_cache(maxsize=1)
def get_redis_client() -> Optional[redis.Redis]:
    settings = get_settings()
    if not settings.assistant_rate_limit_per_minute:
        return None
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        socket_connect_timeout=1,
        socket_timeout=1,
    )
