"""Anonymous session fingerprint derived from client environment attributes."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

FINGERPRINT_LENGTH = 32


def build_session_fingerprint(
    caller_context: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> str:
    """
    Hash user agent, screen geometry, language and the current UTC day into a
    stable string. Collisions are possible: this is a correlation key for
    anonymous callers, not an authentication token.
    """
    now = now or datetime.now(timezone.utc)
    parts = [
        str(caller_context.get("user_agent") or ""),
        str(caller_context.get("screen") or ""),
        str(caller_context.get("language") or ""),
        now.strftime("%Y-%m-%d"),
    ]
    digest = hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()
    return digest[:FINGERPRINT_LENGTH]
