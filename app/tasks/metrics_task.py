"""Celery task for the daily intelligence metrics rollup."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from app.db import db_manager
from app.infra.celery_app import celery_app
from app.infra.logging_config import get_logger
from app.services.metrics_service import MetricsService

logger = get_logger("metrics_task")


def _resolve_day(day_iso: Optional[str]) -> Optional[date]:
    """Explicit ISO date, or yesterday (UTC) when the beat schedule calls us bare."""
    if not day_iso:
        return datetime.now(timezone.utc).date() - timedelta(days=1)
    try:
        return date.fromisoformat(day_iso)
    except ValueError:
        logger.warning("Invalid metrics day: %s", day_iso)
        return None


@celery_app.task(name="app.tasks.metrics_task.compute_daily_metrics_task")
def compute_daily_metrics_task(day_iso: Optional[str] = None) -> Optional[str]:
    """
    Compute (or recompute) the IntelligenceMetric row for one day.

    Returns the ISO date that was computed, or None for an invalid date.
    """
    day = _resolve_day(day_iso)
    if day is None:
        return None
    with db_manager.db_session() as db:
        MetricsService(db).compute_daily_metrics(day)
    return day.isoformat()
