"""
Optional rate limiting for the assistant (per caller).

Uses Redis when ASSISTANT_RATE_LIMIT_PER_MINUTE is set.
If not set or Redis unavailable, no limit is applied.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

import redis

from app.infra.logging_config import get_logger

logger = get_logger("rate_limit")


def check_assistant_rate_limit(
    caller_key: str,
    redis_client: Optional[redis.Redis],
    limit_per_minute: Optional[int],
) -> bool:
    """
    Check if the caller (caller id, session id or fingerprint) is within rate limit.
    Returns True if allowed, False if rate limited.
    If redis_client or limit_per_minute is None, always returns True.
    """
    if redis_client is None or limit_per_minute is None or limit_per_minute <= 0:
        return True
    key = f"assistant:ratelimit:{caller_key}"
    try:
        pipe = redis_client.pipeline()
        pipe.incr(key)
        pipe.expire(key, 60)
        results = pipe.execute()
        count = results[0] if results else 0
        return count <= limit_per_minute
    except redis.RedisError as e:
        logger.warning("Rate limit check failed, allowing request: %s", e)
        return True


def assistant_rate_limit_key(
    caller_id: Optional[str],
    session_id: Optional[UUID],
    client_host: Optional[str],
) -> str:
    """Most specific identity available: caller id, then session, then client IP."""
    if caller_id:
        return f"caller:{caller_id}"
    if session_id:
        return f"session:{session_id}"
    return f"ip:{client_host or 'unknown'}"
