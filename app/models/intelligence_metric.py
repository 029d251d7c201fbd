"""IntelligenceMetric model: daily assistant quality rollup (one row per date)."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, Date, DateTime, Float, Integer

from app.db import Base
from app.models.mixins import utcnow
from app.models.types import GUID


class IntelligenceMetric(Base):
    __tablename__ = "intelligence_metrics"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    metric_date = Column(Date, unique=True, nullable=False, index=True)
    total_conversations = Column(Integer, nullable=False, default=0)
    total_questions = Column(Integer, nullable=False, default=0)
    answered_successfully = Column(Integer, nullable=False, default=0)
    unanswered_questions = Column(Integer, nullable=False, default=0)
    escalated_questions = Column(Integer, nullable=False, default=0)
    avg_confidence_score = Column(Float, nullable=False, default=0.0)
    avg_response_time_ms = Column(Float, nullable=False, default=0.0)
    helpful_count = Column(Integer, nullable=False, default=0)
    unhelpful_count = Column(Integer, nullable=False, default=0)
    satisfaction_rate = Column(Float, nullable=False, default=0.0)
    new_answers_count = Column(Integer, nullable=False, default=0)
    new_topics_count = Column(Integer, nullable=False, default=0)
    unique_users = Column(Integer, nullable=False, default=0)
    returning_users = Column(Integer, nullable=False, default=0)
    computed_at = Column(DateTime, nullable=False, default=utcnow)
