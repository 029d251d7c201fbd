"""Run non-fatal persistence side effects without letting them break a turn."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.infra.logging_config import get_logger

logger = get_logger("best_effort")

T = TypeVar("T")


def safe_rollback(db: Session, label: str) -> None:
    """Roll back the session; a failing rollback (lost connection) is only logged."""
    try:
        db.rollback()
    except SQLAlchemyError as e:
        logger.warning("Rollback after %r failed: %s", label, e)


def run_best_effort(
    db: Session,
    label: str,
    fn: Callable[..., T],
    *args,
    **kwargs,
) -> Optional[T]:
    """
    Call fn(*args, **kwargs) and return its result.

    On a datastore error the session is rolled back so later statements in the
    same request still work, a warning naming the side effect is logged, and
    None is returned.
    """
    try:
        return fn(*args, **kwargs)
    except SQLAlchemyError as e:
        logger.warning("Best-effort side effect %r failed: %s", label, e)
        safe_rollback(db, label)
        return None
