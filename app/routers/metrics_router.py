"""Daily intelligence metrics API."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.schemas.metrics import IntelligenceMetricRead
from app.services.metrics_service import MetricsService

router = APIRouter(
    prefix="/metrics",
    tags=["metrics"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=dict)
def list_metrics(
    limit: int = Query(7, ge=1, le=90),
    db: Session = Depends(get_db),
) -> dict:
    """Most recent daily rollups, newest first."""
    metrics = MetricsService(db).get_recent_metrics(limit=limit)
    items = [IntelligenceMetricRead.model_validate(m) for m in metrics]
    return {"items": items}


@router.post("/{day}/recompute", response_model=IntelligenceMetricRead)
def recompute_metrics(
    day: date,
    db: Session = Depends(get_db),
) -> IntelligenceMetricRead:
    """Recompute one day's rollup now (overwrites the stored row)."""
    metric = MetricsService(db).compute_daily_metrics(day)
    return IntelligenceMetricRead.model_validate(metric)
